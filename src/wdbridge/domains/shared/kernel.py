"""Shared Kernel - Core types shared across bounded contexts.

These types are intentionally minimal and shared between the protocol
context and the configuration layer:
- Dialect (which wire dialect the downstream peer speaks)
- Transport typing (ProxyFunc, ProxyResult)
- Lenient body parsing for request payloads
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, Awaitable, Callable, Mapping, Optional, Tuple

from pydantic import BeforeValidator


class Dialect(str, Enum):
    """Wire dialect spoken by a downstream automation server.

    Values:
        MJSONWP: Legacy JSON Wire Protocol (single timeout kind per call,
            flat window/screenshot endpoints)
        W3C: W3C WebDriver (consolidated timeouts, nested endpoints)
        UNSET: Dialect not negotiated yet; conversion is suppressed
    """
    MJSONWP = "MJSONWP"
    W3C = "W3C"
    UNSET = "UNSET"

    @classmethod
    def parse(cls, value: Any) -> "Dialect":
        """Parse a loosely typed dialect value.

        Accepts Dialect members, None and case-insensitive strings.

        Raises:
            ValueError: If the value does not name a known dialect.
        """
        if value is None:
            return cls.UNSET
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _DIALECT_ALIASES:
                return _DIALECT_ALIASES[normalized]
        raise ValueError(
            f"Unknown dialect: {value!r}. Expected one of: MJSONWP, W3C, UNSET"
        )


_DIALECT_ALIASES = {
    "mjsonwp": Dialect.MJSONWP,
    "jsonwp": Dialect.MJSONWP,
    "w3c": Dialect.W3C,
    "": Dialect.UNSET,
    "none": Dialect.UNSET,
    "unset": Dialect.UNSET,
}


def is_unset(dialect: Any) -> bool:
    """Return True when no downstream dialect is known."""
    return not dialect or dialect == Dialect.UNSET


CoercedDialect = Annotated[Dialect, BeforeValidator(Dialect.parse)]


# ── Transport typing ──────────────────────────────────────────────────

ProxyResult = Tuple[Any, Any]
ProxyFunc = Callable[[str, str, Any], Awaitable[ProxyResult]]


def status_code_of(response: Any) -> Optional[int]:
    """Read the HTTP status code from a transport response.

    Supports objects exposing ``status_code``/``statusCode`` and mappings
    carrying either key. Returns None when no status is available.
    """
    for key in ("status_code", "statusCode"):
        if isinstance(response, Mapping):
            value = response.get(key)
        else:
            value = getattr(response, key, None)
        if value is not None:
            try:
                return int(value)
            except (TypeError, ValueError):
                return None
    return None


def safe_json_parse(body: Any) -> Any:
    """Decode a JSON text body, returning the input unchanged on failure.

    Non-text inputs (dicts, lists, None) are returned as they are.
    """
    if isinstance(body, (bytes, bytearray)):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return body
    if not isinstance(body, str):
        return body
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return body
