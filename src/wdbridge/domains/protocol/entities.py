"""Protocol Domain Entities.

Command identities this layer knows how to convert. Names match the
protocol-neutral identifiers produced by the upstream command router.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class CommandName(str, Enum):
    """Commands whose request shape differs between dialects.

    Body divergence:
        TIMEOUTS, SET_WINDOW
    URL divergence:
        EXECUTE, EXECUTE_ASYNC, GET_ELEMENT_SCREENSHOT,
        GET_WINDOW_HANDLE, GET_WINDOW_HANDLES
    """
    TIMEOUTS = "timeouts"
    SET_WINDOW = "setWindow"
    EXECUTE = "execute"
    EXECUTE_ASYNC = "executeAsync"
    GET_ELEMENT_SCREENSHOT = "getElementScreenshot"
    GET_WINDOW_HANDLE = "getWindowHandle"
    GET_WINDOW_HANDLES = "getWindowHandles"

    @classmethod
    def lookup(cls, name: object) -> Optional["CommandName"]:
        """Resolve a command name, returning None for unknown commands."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            return None

