"""Configuration data models."""

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

import yaml
from pydantic import TypeAdapter, ValidationError

from wdbridge.domains.shared import CoercedDialect, Dialect

if TYPE_CHECKING:
    from wdbridge.domains.protocol import ProtocolConverter
    from wdbridge.domains.shared import ProxyFunc

ENV_DOWNSTREAM_PROTOCOL = "WDBRIDGE_DOWNSTREAM_PROTOCOL"
ENV_LOG_LEVEL = "WDBRIDGE_LOG_LEVEL"
ENV_PUBLISH_EVENTS = "WDBRIDGE_PUBLISH_EVENTS"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_dialect_adapter = TypeAdapter(CoercedDialect)


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ConverterConfig:
    """Centralized configuration for the protocol converter."""

    # Dialect of the downstream server, None until negotiated
    DOWNSTREAM_PROTOCOL: Optional[str] = None

    # Diagnostics
    LOG_LEVEL: str = "INFO"
    PUBLISH_EVENTS: bool = False

    @classmethod
    def from_dict(cls, config: Dict) -> 'ConverterConfig':
        """Create configuration from dictionary."""
        instance = cls()
        for key, value in config.items():
            key = key.upper()
            if hasattr(instance, key):
                setattr(instance, key, value)
        instance.LOG_LEVEL = str(instance.LOG_LEVEL).upper()
        instance.PUBLISH_EVENTS = _parse_bool(instance.PUBLISH_EVENTS)
        return instance

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ConverterConfig':
        """Load configuration from a YAML file."""
        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'ConverterConfig':
        """Create configuration from WDBRIDGE_* environment variables."""
        env = os.environ if environ is None else environ
        config: Dict[str, Any] = {}
        if env.get(ENV_DOWNSTREAM_PROTOCOL):
            config["DOWNSTREAM_PROTOCOL"] = env[ENV_DOWNSTREAM_PROTOCOL]
        if env.get(ENV_LOG_LEVEL):
            config["LOG_LEVEL"] = env[ENV_LOG_LEVEL]
        if env.get(ENV_PUBLISH_EVENTS):
            config["PUBLISH_EVENTS"] = env[ENV_PUBLISH_EVENTS]
        return cls.from_dict(config)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            key: value for key, value in self.__dict__.items()
            if not key.startswith('_')
        }

    def update(self, **kwargs) -> None:
        """Update configuration values."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration key: {key}")

    def validate(self) -> List[str]:
        """Validate configuration values and return any errors."""
        errors = []

        try:
            _dialect_adapter.validate_python(self.DOWNSTREAM_PROTOCOL)
        except ValidationError:
            errors.append(
                "DOWNSTREAM_PROTOCOL must be 'MJSONWP', 'W3C' or unset, "
                f"got {self.DOWNSTREAM_PROTOCOL!r}"
            )

        if str(self.LOG_LEVEL).upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        return errors

    @property
    def dialect(self) -> Dialect:
        """Downstream dialect parsed from DOWNSTREAM_PROTOCOL.

        Raises:
            ValueError: If DOWNSTREAM_PROTOCOL does not name a dialect.
        """
        return _dialect_adapter.validate_python(self.DOWNSTREAM_PROTOCOL)

    def create_converter(
        self,
        proxy_func: "ProxyFunc",
        event_publisher: Optional[Callable[[object], None]] = None,
    ) -> "ProtocolConverter":
        """Create a ProtocolConverter from this configuration.

        Args:
            proxy_func: Async transport used to reach the downstream server.
            event_publisher: Callback for domain events, only wired when
                PUBLISH_EVENTS is enabled.

        Returns:
            A converter with its downstream dialect preset.
        """
        from wdbridge.domains.protocol import ProtocolConverter

        return ProtocolConverter(
            proxy_func,
            downstream_protocol=self.dialect,
            event_publisher=event_publisher if self.PUBLISH_EVENTS else None,
        )

    def configure_logging(self) -> None:
        """Apply LOG_LEVEL to the wdbridge logger hierarchy."""
        logging.getLogger("wdbridge").setLevel(str(self.LOG_LEVEL).upper())
