"""Structural checks on connection settings."""

from __future__ import annotations

from typing import Sequence

from .models import SUPPORTED_PROTOCOLS, ConnectionConfig, ExporterConfig


class ConfigViolation(ValueError):
    """A single problem found in a connection configuration."""


class MissingAddress(ConfigViolation):
    def __init__(self) -> None:
        super().__init__("address must be specified")


class MalformedAddress(ConfigViolation):
    def __init__(self, address: str) -> None:
        super().__init__(f"address '{address}' must be in host:port format")
        self.address = address


class UnsupportedProtocol(ConfigViolation):
    def __init__(self, protocol: str) -> None:
        choices = " or ".join(f'"{name}"' for name in SUPPORTED_PROTOCOLS)
        super().__init__(f"protocol '{protocol}' is not supported; must be {choices}")
        self.protocol = protocol


class InvalidConfigError(ValueError):
    """Raised when a configuration has one or more violations."""

    def __init__(self, violations: Sequence[ConfigViolation]) -> None:
        self.violations = tuple(violations)
        detail = "; ".join(str(violation) for violation in self.violations)
        super().__init__(f"Invalid TDengine configuration: {detail}")


def validate(config: ConnectionConfig | ExporterConfig) -> list[ConfigViolation]:
    """Return every violation found; an empty list means the config is usable."""

    if isinstance(config, ExporterConfig):
        config = config.connection
    violations: list[ConfigViolation] = []
    if not config.address:
        violations.append(MissingAddress())
    else:
        # Only the shape is checked; the port is not required to be numeric.
        parts = config.address.split(":")
        if len(parts) != 2 or not all(parts):
            violations.append(MalformedAddress(config.address))
    if config.protocol not in SUPPORTED_PROTOCOLS:
        violations.append(UnsupportedProtocol(config.protocol))
    return violations


def ensure_valid(config: ConnectionConfig | ExporterConfig) -> None:
    """Raise :class:`InvalidConfigError` listing all violations, if any."""

    violations = validate(config)
    if violations:
        raise InvalidConfigError(violations)


__all__ = [
    "ConfigViolation",
    "InvalidConfigError",
    "MalformedAddress",
    "MissingAddress",
    "UnsupportedProtocol",
    "ensure_valid",
    "validate",
]
