"""URL rewrite rules for commands whose endpoint path differs by dialect.

Each rule holds two direction transforms. A transform first matches the
source shape it expects; when the URL does not have that shape the
transform returns None and the rule is considered inapplicable.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional, Tuple

from wdbridge.domains.shared import Dialect

from .entities import CommandName

UrlTransform = Callable[[str], Optional[str]]


# ── Path fragments ────────────────────────────────────────────────────

MJSONWP_EXECUTE = "/execute"
MJSONWP_EXECUTE_ASYNC = "/execute_async"
W3C_EXECUTE_SYNC = "/execute/sync"
W3C_EXECUTE_ASYNC = "/execute/async"

MJSONWP_WINDOW_HANDLE = "/window_handle"
MJSONWP_WINDOW_HANDLES = "/window_handles"
W3C_WINDOW = "/window"
W3C_WINDOW_HANDLES = "/window/handles"

ASYNC_MARKER = "async"

_MJSONWP_EXECUTE_RE = re.compile(r"/execute(?:_async)?$")
_W3C_EXECUTE_RE = re.compile(r"/execute/(?:sync|async)$")
_MJSONWP_ELEMENT_SCREENSHOT_RE = re.compile(r"/element/([^/]+)/screenshot$")
_W3C_ELEMENT_SCREENSHOT_RE = re.compile(r"/screenshot/([^/]+)$")
_MJSONWP_WINDOW_HANDLE_RE = re.compile(r"/window_handle(s?)$")
_W3C_WINDOW_HANDLE_RE = re.compile(r"/window(?:/handle(s?))?$")


def _replace_tail(url: str, match: "re.Match[str]", replacement: str) -> str:
    return url[:match.start()] + replacement


# ── execute / executeAsync ────────────────────────────────────────────

def execute_to_w3c(url: str) -> Optional[str]:
    match = _MJSONWP_EXECUTE_RE.search(url)
    if match is None:
        return None
    tail = W3C_EXECUTE_ASYNC if ASYNC_MARKER in url else W3C_EXECUTE_SYNC
    return _replace_tail(url, match, tail)


def execute_to_mjsonwp(url: str) -> Optional[str]:
    match = _W3C_EXECUTE_RE.search(url)
    if match is None:
        return None
    tail = MJSONWP_EXECUTE_ASYNC if ASYNC_MARKER in url else MJSONWP_EXECUTE
    return _replace_tail(url, match, tail)


# ── getElementScreenshot ──────────────────────────────────────────────

def element_screenshot_to_w3c(url: str) -> Optional[str]:
    match = _MJSONWP_ELEMENT_SCREENSHOT_RE.search(url)
    if match is None:
        return None
    return _replace_tail(url, match, f"/screenshot/{match.group(1)}")


def element_screenshot_to_mjsonwp(url: str) -> Optional[str]:
    match = _W3C_ELEMENT_SCREENSHOT_RE.search(url)
    if match is None:
        return None
    return _replace_tail(url, match, f"/element/{match.group(1)}/screenshot")


# ── getWindowHandle / getWindowHandles ────────────────────────────────

def window_handles_to_w3c(url: str) -> Optional[str]:
    match = _MJSONWP_WINDOW_HANDLE_RE.search(url)
    if match is None:
        return None
    tail = W3C_WINDOW_HANDLES if match.group(1) else W3C_WINDOW
    return _replace_tail(url, match, tail)


def window_handles_to_mjsonwp(url: str) -> Optional[str]:
    # Also accepts the singular "/window/handle" spelling
    match = _W3C_WINDOW_HANDLE_RE.search(url)
    if match is None:
        return None
    tail = MJSONWP_WINDOW_HANDLES if match.group(1) else MJSONWP_WINDOW_HANDLE
    return _replace_tail(url, match, tail)


# ── Rule table ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RewriteRule:
    """Pair of URL transforms shared by a group of commands.

    Invariants:
        - Transforms are pure functions of the URL
        - A transform returns None when the URL lacks its source shape
    """
    command_names: FrozenSet[CommandName]
    to_mjsonwp: UrlTransform
    to_w3c: UrlTransform

    def applies_to(self, command_name: CommandName) -> bool:
        return command_name in self.command_names

    def rewrite(self, url: str, dialect: Dialect) -> Optional[str]:
        """Rewrite a URL for the given downstream dialect.

        Returns None when the rule is inapplicable to the URL's shape,
        including the case where the transform leaves the URL unchanged.
        """
        transform = self.to_mjsonwp if dialect == Dialect.MJSONWP else self.to_w3c
        rewritten = transform(url)
        if rewritten is None or rewritten == url:
            return None
        return rewritten


COMMAND_URL_CONFLICTS: Tuple[RewriteRule, ...] = (
    RewriteRule(
        command_names=frozenset({CommandName.EXECUTE, CommandName.EXECUTE_ASYNC}),
        to_mjsonwp=execute_to_mjsonwp,
        to_w3c=execute_to_w3c,
    ),
    RewriteRule(
        command_names=frozenset({CommandName.GET_ELEMENT_SCREENSHOT}),
        to_mjsonwp=element_screenshot_to_mjsonwp,
        to_w3c=element_screenshot_to_w3c,
    ),
    RewriteRule(
        command_names=frozenset({
            CommandName.GET_WINDOW_HANDLE,
            CommandName.GET_WINDOW_HANDLES,
        }),
        to_mjsonwp=window_handles_to_mjsonwp,
        to_w3c=window_handles_to_w3c,
    ),
)


def find_rule(command_name: object) -> Optional[RewriteRule]:
    """Return the rule covering a command, or None."""
    command = CommandName.lookup(command_name)
    if command is None:
        return None
    for rule in COMMAND_URL_CONFLICTS:
        if rule.applies_to(command):
            return rule
    return None
