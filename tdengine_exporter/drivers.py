"""Driver selection and connection opening."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .dsn import build_dsn
from .models import DEFAULT_DATABASE, ConnectionConfig

LOG = logging.getLogger(__name__)

DriverOpener = Callable[[str], Any]

DRIVER_NAMES: Mapping[str, str] = {
    "ws": "taosWS",
    "http": "taosRestful",
}


class DriverOpenError(RuntimeError):
    """Raised when a driver is unavailable or rejects the DSN."""

    def __init__(self, message: str, *, driver: str | None = None, dsn: str | None = None) -> None:
        super().__init__(message)
        self.driver = driver
        self.dsn = dsn


def driver_name_for(protocol: str) -> str:
    """Map a protocol to the registered driver identity."""

    try:
        return DRIVER_NAMES[protocol]
    except KeyError:
        raise DriverOpenError(f"No driver for protocol '{protocol}'") from None


class DriverRegistry:
    """Collects driver openers keyed by driver name."""

    def __init__(self, openers: Mapping[str, DriverOpener] | None = None) -> None:
        self._openers: dict[str, DriverOpener] = dict(openers or {})

    def register(self, name: str, opener: DriverOpener) -> None:
        """Register (or replace) the opener for a driver name."""

        if not callable(opener):
            raise ValueError(f"Driver '{name}' opener must be callable")
        self._openers[name] = opener

    def get(self, name: str) -> DriverOpener | None:
        return self._openers.get(name)

    def names(self) -> list[str]:
        """Return the registered driver names."""

        return sorted(self._openers)


class ConnectionFactory:
    """Builds the DSN for a config and hands it to the matching driver."""

    def __init__(self, registry: DriverRegistry | None = None) -> None:
        self._registry = registry or DriverRegistry()

    @property
    def registry(self) -> DriverRegistry:
        return self._registry

    def open(self, config: ConnectionConfig, database: str = "") -> Any:
        """Open a connection handle; failures surface as :class:`DriverOpenError`."""

        database = database or config.database or DEFAULT_DATABASE
        dsn = build_dsn(config, database)
        safe_dsn = build_dsn(config, database, redact=True)
        driver = driver_name_for(config.protocol)
        opener = self._registry.get(driver)
        if opener is None:
            raise DriverOpenError(f"Driver '{driver}' is not registered", driver=driver, dsn=safe_dsn)
        LOG.debug("Opening TDengine connection", extra={"driver": driver, "dsn": safe_dsn})
        try:
            return opener(dsn)
        except Exception as exc:
            raise DriverOpenError(
                f"Driver '{driver}' failed to open '{safe_dsn}': {exc}",
                driver=driver,
                dsn=safe_dsn,
            ) from exc


__all__ = [
    "ConnectionFactory",
    "DRIVER_NAMES",
    "DriverOpenError",
    "DriverOpener",
    "DriverRegistry",
    "driver_name_for",
]
