"""Pytest fixtures for domain tests.

These fixtures support testing the protocol conversion context with a
recording transport in place of a real downstream server.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import List
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def proxy_func() -> AsyncMock:
    """Transport mock that answers every call with HTTP 200."""
    return AsyncMock(return_value=(SimpleNamespace(status_code=200), {"value": None}))


@pytest.fixture
def published_events() -> List[object]:
    return []


@pytest.fixture
def event_publisher(published_events):
    return published_events.append
