"""Lifecycle shell shared by the logs, metrics and traces exporters."""

from __future__ import annotations

import logging
from typing import Any

from .drivers import ConnectionFactory
from .models import SIGNALS, ExporterConfig
from .validation import ensure_valid

LOG = logging.getLogger(__name__)


class SignalExporter:
    """Owns the database handle used to write one signal's records."""

    def __init__(self, signal: str, config: ExporterConfig, factory: ConnectionFactory) -> None:
        if signal not in SIGNALS:
            raise ValueError(f"Unknown signal '{signal}'; expected one of {', '.join(SIGNALS)}.")
        self._signal = signal
        self._config = config
        self._factory = factory
        self._client: Any | None = None

    @property
    def signal(self) -> str:
        return self._signal

    @property
    def table_name(self) -> str:
        """Table the exporter writes into."""

        return self._config.targets.table_for(self._signal)

    @property
    def ttl_days(self) -> int:
        return self._config.targets.ttl_days

    @property
    def client(self) -> Any | None:
        """Open driver handle, or ``None`` before :meth:`start`."""

        return self._client

    def start(self) -> None:
        """Validate the config and open the connection."""

        if self._client is not None:
            return
        ensure_valid(self._config)
        self._client = self._factory.open(self._config.connection)
        LOG.info(
            "TDengine exporter started",
            extra={"signal": self._signal, "table": self.table_name},
        )

    def shutdown(self) -> None:
        """Close the connection if one is open."""

        client, self._client = self._client, None
        if client is None:
            return
        close = getattr(client, "close", None)
        if callable(close):
            close()
        LOG.info("TDengine exporter stopped", extra={"signal": self._signal})


def create_exporters(config: ExporterConfig, factory: ConnectionFactory) -> dict[str, SignalExporter]:
    """Build one exporter per signal sharing the same config and factory."""

    return {signal: SignalExporter(signal, config, factory) for signal in SIGNALS}


__all__ = ["SignalExporter", "create_exporters"]
