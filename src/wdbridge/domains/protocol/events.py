"""Protocol Domain Events.

Observational records of conversion decisions. Events are published to
an optional callback and never influence what is sent downstream.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass
class UrlRewritten:
    """Emitted when a command URL was rewritten for the downstream dialect."""
    command_name: str
    original_url: str
    rewritten_url: str
    dialect: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "UrlRewritten",
            "command_name": self.command_name,
            "original_url": self.original_url,
            "rewritten_url": self.rewritten_url,
            "dialect": self.dialect,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class UrlRewriteSkipped:
    """Emitted when a rule exists for the command but the URL did not match.

    The request is forwarded with its original URL.
    """
    command_name: str
    url: str
    dialect: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "UrlRewriteSkipped",
            "command_name": self.command_name,
            "url": self.url,
            "dialect": self.dialect,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class WindowTargetReassigned:
    """Emitted when a window switch body was remapped.

    Attributes:
        source_field: Field read from the incoming body ("name" or "handle").
        target_field: Field written to the forwarded body.
        value: The window identifier carried over.
    """
    source_field: str
    target_field: str
    value: Any
    dialect: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "WindowTargetReassigned",
            "source_field": self.source_field,
            "target_field": self.target_field,
            "value": self.value,
            "dialect": self.dialect,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class TimeoutRequestsPlanned:
    """Emitted before the timeout request bodies are sent downstream."""
    request_bodies: List[Any]
    dialect: str
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def request_count(self) -> int:
        return len(self.request_bodies)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "TimeoutRequestsPlanned",
            "request_bodies": self.request_bodies,
            "request_count": self.request_count,
            "dialect": self.dialect,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class TimeoutFanOutAborted:
    """Emitted when a timeout sub-request failed and the rest were not sent.

    Earlier successful sub-requests are not rolled back.
    """
    failed_body: Any
    status_code: int
    completed_requests: int
    skipped_requests: int
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "TimeoutFanOutAborted",
            "failed_body": self.failed_body,
            "status_code": self.status_code,
            "completed_requests": self.completed_requests,
            "skipped_requests": self.skipped_requests,
            "timestamp": self.timestamp.isoformat(),
        }
