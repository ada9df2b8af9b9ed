"""Tests for protocol domain event serialization."""

from __future__ import annotations

from wdbridge.domains.protocol import (
    TimeoutFanOutAborted,
    TimeoutRequestsPlanned,
    UrlRewriteSkipped,
    UrlRewritten,
    WindowTargetReassigned,
)


def test_url_rewritten_to_dict():
    event = UrlRewritten(
        command_name="execute",
        original_url="/session/1/execute",
        rewritten_url="/session/1/execute/sync",
        dialect="W3C",
    )
    data = event.to_dict()
    assert data["event_type"] == "UrlRewritten"
    assert data["rewritten_url"] == "/session/1/execute/sync"
    assert data["timestamp"] == event.timestamp.isoformat()


def test_url_rewrite_skipped_to_dict():
    data = UrlRewriteSkipped(command_name="execute", url="/x", dialect="MJSONWP").to_dict()
    assert data["event_type"] == "UrlRewriteSkipped"
    assert data["dialect"] == "MJSONWP"


def test_window_target_reassigned_to_dict():
    data = WindowTargetReassigned(
        source_field="name", target_field="handle", value="main", dialect="W3C"
    ).to_dict()
    assert (data["source_field"], data["target_field"], data["value"]) == ("name", "handle", "main")


def test_timeout_requests_planned_counts_bodies():
    event = TimeoutRequestsPlanned(
        request_bodies=[{"type": "script", "ms": 1}, {"type": "implicit", "ms": 0}],
        dialect="MJSONWP",
    )
    assert event.request_count == 2
    assert event.to_dict()["request_count"] == 2


def test_timeout_fan_out_aborted_to_dict():
    data = TimeoutFanOutAborted(
        failed_body={"type": "page load", "ms": "x"},
        status_code=400,
        completed_requests=1,
        skipped_requests=1,
    ).to_dict()
    assert data["event_type"] == "TimeoutFanOutAborted"
    assert data["status_code"] == 400
