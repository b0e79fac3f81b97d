"""Shared dataclasses describing a TDengine connection and its export targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

SUPPORTED_PROTOCOLS: tuple[str, ...] = ("ws", "http")
DEFAULT_DATABASE = "otel"
SIGNALS: tuple[str, ...] = ("logs", "metrics", "traces")


@dataclass(frozen=True, slots=True)
class WsParams:
    """WebSocket connection options; timeouts are driver duration strings like ``30m``."""

    read_timeout: str | None = None
    write_timeout: str | None = None


@dataclass(frozen=True, slots=True)
class HttpParams:
    """REST connection options. A buffer size of ``0`` or less means unset."""

    read_buffer_size: int = 0
    disable_compression: bool = False


ProtocolParams = Union[WsParams, HttpParams]


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """Credentials, endpoint and per-protocol options for one database."""

    username: str = "root"
    password: str = ""
    protocol: str = "ws"
    address: str = "localhost:6041"
    database: str = ""
    params: ProtocolParams | None = None


@dataclass(frozen=True, slots=True)
class ExportTargets:
    """Table names for each signal plus retention in days (``0`` keeps data forever)."""

    logs_table_name: str = "otel_logs"
    metrics_table_name: str = "otel_metrics"
    traces_table_name: str = "otel_traces"
    ttl_days: int = 0

    def table_for(self, signal: str) -> str:
        if signal == "logs":
            return self.logs_table_name
        if signal == "metrics":
            return self.metrics_table_name
        if signal == "traces":
            return self.traces_table_name
        raise ValueError(f"Unknown signal '{signal}'; expected one of {', '.join(SIGNALS)}.")


@dataclass(frozen=True, slots=True)
class ExporterConfig:
    """Top-level configuration: where to connect and where to write."""

    connection: ConnectionConfig = field(default_factory=ConnectionConfig)
    targets: ExportTargets = field(default_factory=ExportTargets)


__all__ = [
    "ConnectionConfig",
    "DEFAULT_DATABASE",
    "ExportTargets",
    "ExporterConfig",
    "HttpParams",
    "ProtocolParams",
    "SIGNALS",
    "SUPPORTED_PROTOCOLS",
    "WsParams",
]
