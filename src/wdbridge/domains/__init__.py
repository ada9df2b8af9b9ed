"""Domain-Driven Design bounded contexts for wdbridge.

- Shared Kernel: Dialect and transport typing
- Protocol Context: request conversion between WebDriver dialects
"""

from wdbridge.domains.shared import (
    Dialect,
    ProxyFunc,
    ProxyResult,
)

from wdbridge.domains.protocol import (
    CommandName,
    ProtocolConverter,
)

__all__ = [
    # Shared Kernel
    "Dialect",
    "ProxyFunc",
    "ProxyResult",
    # Protocol Domain
    "CommandName",
    "ProtocolConverter",
]
