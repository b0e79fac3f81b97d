"""Exporter configuration loading helpers."""

from __future__ import annotations

from pathlib import Path

import tomllib

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import ConnectionConfig, ExporterConfig, ExportTargets, HttpParams, ProtocolParams, WsParams

CONFIG_FILE = Path.home() / ".config" / "tdengine-exporter" / "config.toml"


class ConfigLoadError(ValueError):
    """Raised when a config file exists but cannot be parsed."""


class ConnParamsSettings(BaseModel):
    """Driver options as written in config.toml; only the protocol's own keys are used."""

    model_config = ConfigDict(frozen=True)

    read_timeout: str | None = None
    write_timeout: str | None = None
    read_buffer_size: int = Field(default=0, ge=0)
    disable_compression: bool = False

    def for_protocol(self, protocol: str) -> ProtocolParams | None:
        if protocol == "ws":
            return WsParams(read_timeout=self.read_timeout, write_timeout=self.write_timeout)
        if protocol == "http":
            return HttpParams(
                read_buffer_size=self.read_buffer_size,
                disable_compression=self.disable_compression,
            )
        return None


class ExporterSettings(BaseModel):
    """Shape of the exporter configuration file."""

    model_config = ConfigDict(frozen=True)

    username: str = "root"
    password: str = ""
    protocol: str = "ws"
    address: str = "localhost:6041"
    database: str = ""
    conn_params: ConnParamsSettings = Field(default_factory=ConnParamsSettings)
    logs_table_name: str = "otel_logs"
    metrics_table_name: str = "otel_metrics"
    traces_table_name: str = "otel_traces"
    ttl_days: int = Field(default=0, ge=0)

    def to_config(self) -> ExporterConfig:
        """Convert the file representation into the runtime config."""

        connection = ConnectionConfig(
            username=self.username,
            password=self.password,
            protocol=self.protocol,
            address=self.address,
            database=self.database,
            params=self.conn_params.for_protocol(self.protocol),
        )
        targets = ExportTargets(
            logs_table_name=self.logs_table_name,
            metrics_table_name=self.metrics_table_name,
            traces_table_name=self.traces_table_name,
            ttl_days=self.ttl_days,
        )
        return ExporterConfig(connection=connection, targets=targets)


def create_default_config() -> ExporterConfig:
    return ExporterSettings().to_config()


def load_config(path: Path | None = None) -> ExporterConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    try:
        data = _read_config_file(path or CONFIG_FILE)
    except FileNotFoundError:
        return create_default_config()
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"Could not parse {path or CONFIG_FILE}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"Could not read {path or CONFIG_FILE}: {exc}") from exc

    try:
        settings = ExporterSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(f"Invalid settings in {path or CONFIG_FILE}: {exc}") from exc
    return settings.to_config()


def _read_config_file(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = dict(raw)
    # Older files spell the address key "endpoint".
    if "address" not in data and "endpoint" in data:
        data["address"] = data.pop("endpoint")
    return data


__all__ = [
    "CONFIG_FILE",
    "ConfigLoadError",
    "ConnParamsSettings",
    "ExporterSettings",
    "create_default_config",
    "load_config",
]
