"""Timeout body decomposition between dialects.

W3C ``/timeouts`` can carry up to three timeout kinds in a single body,
while MJSONWP ``/timeouts`` only accepts one ``{type, ms}`` pair per
call. These helpers compute the request bodies to send downstream.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, List, Mapping

from wdbridge.domains.shared import Dialect

MJSONWP_PAGE_LOAD = "page load"
W3C_PAGE_LOAD = "pageLoad"

# Unsigned ASCII integer or decimal, "." or "," as separator
TIMEOUT_VALUE_PATTERN = re.compile(r"[0-9]+(?:[.,][0-9]*)?")


def to_w3c_timeout_type(timeout_type: Any) -> Any:
    return W3C_PAGE_LOAD if timeout_type == MJSONWP_PAGE_LOAD else timeout_type


def to_mjsonwp_timeout_type(timeout_type: Any) -> Any:
    return MJSONWP_PAGE_LOAD if timeout_type == W3C_PAGE_LOAD else timeout_type


def _stringify(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return json.dumps(value)
    return str(value)


def is_timeout_value(value: Any) -> bool:
    """Check whether a value reads as a non-negative number of ms."""
    return TIMEOUT_VALUE_PATTERN.fullmatch(_stringify(value)) is not None


def is_single_timeout_body(body: Any) -> bool:
    """True for the MJSONWP ``{type, ms}`` shape."""
    return isinstance(body, Mapping) and "ms" in body and "type" in body


def get_timeout_request_objects(body: Any, dialect: Any) -> List[Any]:
    """Compute the timeout bodies to send for the downstream dialect.

    Args:
        body: Incoming ``/timeouts`` request body.
        dialect: Active downstream dialect.

    Returns:
        Request bodies in the order they must be sent. Entries whose
        value is not numeric are dropped when splitting a W3C body.
    """
    if dialect == Dialect.W3C and is_single_timeout_body(body):
        return [{to_w3c_timeout_type(body["type"]): body["ms"]}]

    if (
        dialect == Dialect.MJSONWP
        and isinstance(body, Mapping)
        and not is_single_timeout_body(body)
    ):
        requests: List[Dict[str, Any]] = []
        for timeout_type, value in body.items():
            if not is_timeout_value(value):
                continue
            requests.append({
                "type": to_mjsonwp_timeout_type(timeout_type),
                "ms": value,
            })
        return requests

    return [body]
