"""Protocol Domain - Bounded Context for WebDriver dialect conversion.

Adapts requests between an upstream client and a downstream server that
speak different dialects of the WebDriver protocol:

- MJSONWP: legacy JSON Wire Protocol
- W3C: W3C WebDriver

Only a fixed set of divergent commands is converted. Every other request
is forwarded as received, and nothing is converted until the downstream
dialect is known.

Example usage:
    from wdbridge.domains.protocol import ProtocolConverter
    from wdbridge.domains.shared import Dialect

    converter = ProtocolConverter(proxy_func)
    converter.downstream_protocol = Dialect.MJSONWP

    # Sent downstream as two sequential MJSONWP calls
    response, body = await converter.convert_and_proxy(
        "timeouts", "/session/1/timeouts", "POST",
        {"script": 1000, "pageLoad": 30000},
    )
"""

# Entities
from .entities import (
    CommandName,
)

# Rewrite rules
from .rewrite_rules import (
    COMMAND_URL_CONFLICTS,
    RewriteRule,
    find_rule,
)

# Timeout decomposition
from .timeouts import (
    get_timeout_request_objects,
    is_timeout_value,
    to_mjsonwp_timeout_type,
    to_w3c_timeout_type,
)

# Domain Events
from .events import (
    TimeoutFanOutAborted,
    TimeoutRequestsPlanned,
    UrlRewriteSkipped,
    UrlRewritten,
    WindowTargetReassigned,
)

# Services
from .services import (
    ProtocolConverter,
)

__all__ = [
    # Entities
    "CommandName",
    # Rewrite rules
    "COMMAND_URL_CONFLICTS",
    "RewriteRule",
    "find_rule",
    # Timeout decomposition
    "get_timeout_request_objects",
    "is_timeout_value",
    "to_mjsonwp_timeout_type",
    "to_w3c_timeout_type",
    # Domain Events
    "TimeoutFanOutAborted",
    "TimeoutRequestsPlanned",
    "UrlRewriteSkipped",
    "UrlRewritten",
    "WindowTargetReassigned",
    # Services
    "ProtocolConverter",
]
