"""WebDriver Dialect Bridge - protocol conversion for proxied automation sessions."""

from wdbridge.domains.protocol import ProtocolConverter  # noqa: F401
from wdbridge.domains.shared import Dialect  # noqa: F401

__all__ = ["Dialect", "ProtocolConverter"]

__version__ = "0.1.0"
