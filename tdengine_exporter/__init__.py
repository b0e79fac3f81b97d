"""Connection settings and DSN construction for the TDengine exporter."""

from __future__ import annotations

from .drivers import ConnectionFactory, DriverOpenError, DriverRegistry, driver_name_for
from .dsn import build_dsn
from .models import (
    DEFAULT_DATABASE,
    SUPPORTED_PROTOCOLS,
    ConnectionConfig,
    ExportTargets,
    ExporterConfig,
    HttpParams,
    ProtocolParams,
    WsParams,
)
from .params import encode_params
from .validation import (
    ConfigViolation,
    InvalidConfigError,
    MalformedAddress,
    MissingAddress,
    UnsupportedProtocol,
    ensure_valid,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigViolation",
    "ConnectionConfig",
    "ConnectionFactory",
    "DEFAULT_DATABASE",
    "DriverOpenError",
    "DriverRegistry",
    "ExportTargets",
    "ExporterConfig",
    "HttpParams",
    "InvalidConfigError",
    "MalformedAddress",
    "MissingAddress",
    "ProtocolParams",
    "SUPPORTED_PROTOCOLS",
    "UnsupportedProtocol",
    "WsParams",
    "build_dsn",
    "driver_name_for",
    "encode_params",
    "ensure_valid",
    "validate",
]
