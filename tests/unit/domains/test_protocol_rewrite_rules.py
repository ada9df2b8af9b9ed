"""Tests for URL rewrite rules between MJSONWP and W3C endpoint shapes."""

from __future__ import annotations

import pytest

from wdbridge.domains.protocol import (
    COMMAND_URL_CONFLICTS,
    CommandName,
    RewriteRule,
    find_rule,
)
from wdbridge.domains.protocol.rewrite_rules import (
    element_screenshot_to_mjsonwp,
    element_screenshot_to_w3c,
    execute_to_mjsonwp,
    execute_to_w3c,
    window_handles_to_mjsonwp,
    window_handles_to_w3c,
)
from wdbridge.domains.shared import Dialect

BASE = "http://127.0.0.1:4444/wd/hub/session/abc"


class TestRuleTable:
    def test_table_is_immutable_tuple(self):
        assert isinstance(COMMAND_URL_CONFLICTS, tuple)

    def test_command_names_are_partitioned(self):
        seen = set()
        for rule in COMMAND_URL_CONFLICTS:
            assert not (seen & rule.command_names)
            seen |= rule.command_names

    def test_rule_is_frozen(self):
        rule = COMMAND_URL_CONFLICTS[0]
        with pytest.raises(AttributeError):
            rule.to_w3c = execute_to_mjsonwp

    @pytest.mark.parametrize("name", [
        "execute",
        "executeAsync",
        "getElementScreenshot",
        "getWindowHandle",
        "getWindowHandles",
    ])
    def test_find_rule_for_url_commands(self, name):
        rule = find_rule(name)
        assert rule is not None
        assert rule.applies_to(CommandName(name))

    @pytest.mark.parametrize("name", ["timeouts", "setWindow", "findElement", ""])
    def test_find_rule_returns_none(self, name):
        assert find_rule(name) is None

    def test_find_rule_accepts_enum(self):
        assert find_rule(CommandName.EXECUTE) is find_rule("execute")


class TestExecuteTransforms:
    def test_sync_to_w3c(self):
        assert execute_to_w3c(f"{BASE}/execute") == f"{BASE}/execute/sync"

    def test_async_to_w3c(self):
        assert execute_to_w3c(f"{BASE}/execute_async") == f"{BASE}/execute/async"

    def test_sync_to_mjsonwp(self):
        assert execute_to_mjsonwp(f"{BASE}/execute/sync") == f"{BASE}/execute"

    def test_async_to_mjsonwp(self):
        assert execute_to_mjsonwp(f"{BASE}/execute/async") == f"{BASE}/execute_async"

    def test_already_w3c_shape_not_matched(self):
        assert execute_to_w3c(f"{BASE}/execute/sync") is None

    def test_already_mjsonwp_shape_not_matched(self):
        assert execute_to_mjsonwp(f"{BASE}/execute_async") is None


class TestElementScreenshotTransforms:
    def test_to_w3c(self):
        assert (
            element_screenshot_to_w3c(f"{BASE}/element/123/screenshot")
            == f"{BASE}/screenshot/123"
        )

    def test_to_mjsonwp(self):
        assert (
            element_screenshot_to_mjsonwp(f"{BASE}/screenshot/123")
            == f"{BASE}/element/123/screenshot"
        )

    def test_page_screenshot_not_matched(self):
        assert element_screenshot_to_w3c(f"{BASE}/screenshot") is None
        assert element_screenshot_to_mjsonwp(f"{BASE}/screenshot") is None


class TestWindowHandleTransforms:
    @pytest.mark.parametrize("source,target", [
        ("/window_handle", "/window"),
        ("/window_handles", "/window/handles"),
    ])
    def test_to_w3c(self, source, target):
        assert window_handles_to_w3c(BASE + source) == BASE + target

    @pytest.mark.parametrize("source,target", [
        ("/window", "/window_handle"),
        ("/window/handle", "/window_handle"),
        ("/window/handles", "/window_handles"),
    ])
    def test_to_mjsonwp(self, source, target):
        assert window_handles_to_mjsonwp(BASE + source) == BASE + target

    def test_unrelated_window_endpoint_not_matched(self):
        assert window_handles_to_w3c(f"{BASE}/window/rect") is None
        assert window_handles_to_mjsonwp(f"{BASE}/window/rect") is None


class TestRewriteRule:
    def test_picks_direction_from_dialect(self):
        rule = find_rule("getWindowHandle")
        assert rule.rewrite(f"{BASE}/window", Dialect.MJSONWP) == f"{BASE}/window_handle"
        assert rule.rewrite(f"{BASE}/window_handle", Dialect.W3C) == f"{BASE}/window"

    def test_inapplicable_shape_returns_none(self):
        rule = find_rule("getWindowHandle")
        assert rule.rewrite(f"{BASE}/window", Dialect.W3C) is None

    def test_identity_transform_reported_as_inapplicable(self):
        rule = RewriteRule(
            command_names=frozenset({CommandName.EXECUTE}),
            to_mjsonwp=lambda url: url,
            to_w3c=lambda url: url,
        )
        assert rule.rewrite(f"{BASE}/execute", Dialect.W3C) is None
