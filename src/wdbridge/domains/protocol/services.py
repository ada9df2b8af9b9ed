"""Protocol Domain Services.

Contains the ProtocolConverter, which adapts requests between an upstream
client and a downstream server speaking a different WebDriver dialect,
then forwards them through an injected transport function.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from wdbridge.domains.shared import (
    Dialect,
    ProxyFunc,
    ProxyResult,
    is_unset,
    safe_json_parse,
    status_code_of,
)

from .entities import CommandName
from .events import (
    TimeoutFanOutAborted,
    TimeoutRequestsPlanned,
    UrlRewriteSkipped,
    UrlRewritten,
    WindowTargetReassigned,
)
from .rewrite_rules import find_rule
from .timeouts import get_timeout_request_objects

logger = logging.getLogger(__name__)

EventPublisher = Optional[Callable[[object], None]]


def _dialect_label(dialect: Any) -> str:
    return dialect.value if isinstance(dialect, Dialect) else str(dialect)


class ProtocolConverter:
    """Converts and proxies requests whose shape differs between dialects.

    The converter does nothing until the downstream dialect is known.
    Once set, it handles three kinds of divergence:

    - ``timeouts``: W3C bodies may carry several timeout kinds, MJSONWP
      accepts one per call, so the body is split and sent sequentially.
    - ``setWindow``: the window target lives in ``handle`` (W3C) or
      ``name`` (MJSONWP).
    - A handful of commands live under different URLs; see
      :mod:`wdbridge.domains.protocol.rewrite_rules`.

    Everything else is forwarded unchanged.

    Examples:
        >>> converter = ProtocolConverter(proxy_func)
        >>> converter.downstream_protocol = Dialect.MJSONWP
        >>> response, body = await converter.convert_and_proxy(
        ...     "getWindowHandles", "/session/1/window/handles", "GET", None)
    """

    def __init__(
        self,
        proxy_func: ProxyFunc,
        downstream_protocol: Any = None,
        event_publisher: EventPublisher = None,
    ) -> None:
        """Initialize the converter.

        Args:
            proxy_func: Async transport called as ``(url, method, body)``
                and returning a ``(response, body)`` tuple.
            downstream_protocol: Dialect of the downstream peer, if known.
            event_publisher: Optional callback for publishing domain events.
        """
        self.proxy_func = proxy_func
        self._downstream_protocol = downstream_protocol
        self._event_publisher = event_publisher

    @property
    def downstream_protocol(self) -> Any:
        return self._downstream_protocol

    @downstream_protocol.setter
    def downstream_protocol(self, value: Any) -> None:
        self._downstream_protocol = value

    # ── Timeouts ─────────────────────────────────────────────────────

    def get_timeout_request_objects(self, body: Any) -> List[Any]:
        """Timeout bodies to send for the current downstream dialect.

        JSON text bodies are decoded before being split. A body that needs
        no reshaping is returned exactly as received.
        """
        body_obj = safe_json_parse(body)
        if not isinstance(body_obj, dict):
            return [body]
        request_objects = get_timeout_request_objects(body_obj, self.downstream_protocol)
        if len(request_objects) == 1 and request_objects[0] is body_obj:
            return [body]
        return request_objects

    async def proxy_set_timeouts(self, url: str, method: str, body: Any) -> ProxyResult:
        """Proxy one or more timeout requests and return a single result.

        Requests are sent strictly one after another. Against an MJSONWP
        peer the first response with status >= 400 is returned right away
        and the remaining requests are not sent. Timeouts already applied
        by earlier requests stay applied.
        """
        timeout_request_objects = self.get_timeout_request_objects(body)
        logger.debug(
            f"Will send the following request bodies to /timeouts: "
            f"{timeout_request_objects!r}"
        )
        self._publish_event(TimeoutRequestsPlanned(
            request_bodies=list(timeout_request_objects),
            dialect=_dialect_label(self.downstream_protocol),
        ))

        result: ProxyResult = (None, None)
        for index, timeout_obj in enumerate(timeout_request_objects):
            result = await self.proxy_func(url, method, timeout_obj)

            if self.downstream_protocol != Dialect.MJSONWP:
                return result

            status_code = status_code_of(result[0])
            if status_code is not None and status_code >= 400:
                skipped = len(timeout_request_objects) - index - 1
                logger.debug(
                    f"Timeout request {timeout_obj!r} failed with status "
                    f"{status_code}; skipping {skipped} remaining request(s)"
                )
                self._publish_event(TimeoutFanOutAborted(
                    failed_body=timeout_obj,
                    status_code=status_code,
                    completed_requests=index,
                    skipped_requests=skipped,
                ))
                return result

        return result

    # ── Window switching ─────────────────────────────────────────────

    async def proxy_set_window(self, url: str, method: str, body: Any) -> ProxyResult:
        """Proxy a window switch, moving the target between name and handle.

        Bodies that do not parse to a JSON object are forwarded as received.
        """
        body_obj = safe_json_parse(body)
        if isinstance(body_obj, dict):
            if (
                self.downstream_protocol == Dialect.W3C
                and "name" in body_obj
                and "handle" not in body_obj
            ):
                return await self._reassign_window_target(
                    url, method, body_obj, "name", "handle"
                )
            if (
                self.downstream_protocol == Dialect.MJSONWP
                and "handle" in body_obj
                and "name" not in body_obj
            ):
                return await self._reassign_window_target(
                    url, method, body_obj, "handle", "name"
                )

        return await self.proxy_func(url, method, body)

    async def _reassign_window_target(
        self,
        url: str,
        method: str,
        body_obj: dict,
        source_field: str,
        target_field: str,
    ) -> ProxyResult:
        value = body_obj[source_field]
        dialect = _dialect_label(self.downstream_protocol)
        logger.debug(
            f"Reassigned '{source_field}' value '{value}' to '{target_field}' "
            f"as per {dialect} spec"
        )
        self._publish_event(WindowTargetReassigned(
            source_field=source_field,
            target_field=target_field,
            value=value,
            dialect=dialect,
        ))
        return await self.proxy_func(url, method, {target_field: value})

    # ── URL rewriting ────────────────────────────────────────────────

    def rewrite_url(self, command_name: str, url: str) -> Optional[str]:
        """Return the URL rewritten for the downstream dialect.

        Returns None when the dialect is unknown, the command has no
        rewrite rule, or the URL does not have the shape the rule expects.
        """
        if is_unset(self.downstream_protocol):
            return None
        rule = find_rule(command_name)
        if rule is None:
            return None
        return rule.rewrite(url, self.downstream_protocol)

    # ── Dispatch ─────────────────────────────────────────────────────

    async def convert_and_proxy(
        self,
        command_name: str,
        url: str,
        method: str,
        body: Any = None,
    ) -> ProxyResult:
        """Handle endpoints that cross between the upstream and downstream dialects.

        Args:
            command_name: Protocol-neutral command identifier.
            url: Request URL as sent by the upstream client.
            method: HTTP method.
            body: Request body, either JSON text or an already parsed value.

        Returns:
            The ``(response, body)`` tuple produced by the transport.
        """
        if is_unset(self.downstream_protocol):
            # Nothing to convert to without a known target dialect
            return await self.proxy_func(url, method, body)

        command = CommandName.lookup(command_name)
        # Same URL, different body
        if command == CommandName.TIMEOUTS:
            return await self.proxy_set_timeouts(url, method, body)
        if command == CommandName.SET_WINDOW:
            return await self.proxy_set_window(url, method, body)

        # Same body, different URL
        rule = find_rule(command)
        if rule is not None:
            dialect = _dialect_label(self.downstream_protocol)
            rewritten_url = rule.rewrite(url, self.downstream_protocol)
            if rewritten_url is None:
                logger.debug(
                    f"Did not know how to rewrite the original URL '{url}' "
                    f"for {dialect} protocol"
                )
                self._publish_event(UrlRewriteSkipped(
                    command_name=command.value,
                    url=url,
                    dialect=dialect,
                ))
            else:
                logger.info(
                    f"Rewrote the original URL '{url}' to '{rewritten_url}' "
                    f"for {dialect} protocol"
                )
                self._publish_event(UrlRewritten(
                    command_name=command.value,
                    original_url=url,
                    rewritten_url=rewritten_url,
                    dialect=dialect,
                ))
                return await self.proxy_func(rewritten_url, method, body)

        return await self.proxy_func(url, method, body)

    dispatch = convert_and_proxy

    # ── Diagnostics ──────────────────────────────────────────────────

    def _publish_event(self, event: object) -> None:
        """Publish a domain event.

        Args:
            event: The event to publish.
        """
        if self._event_publisher:
            try:
                self._event_publisher(event)
            except Exception as e:
                logger.error(f"Error publishing event {type(event).__name__}: {e}")
