"""Shared Kernel for wdbridge bounded contexts."""

from .kernel import (
    CoercedDialect,
    Dialect,
    ProxyFunc,
    ProxyResult,
    is_unset,
    safe_json_parse,
    status_code_of,
)

__all__ = [
    "CoercedDialect",
    "Dialect",
    "ProxyFunc",
    "ProxyResult",
    "is_unset",
    "safe_json_parse",
    "status_code_of",
]
