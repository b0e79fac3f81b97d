"""DSN construction for the TDengine drivers."""

from __future__ import annotations

from .models import ConnectionConfig
from .params import encode_params

REDACTED = "***"


def build_dsn(config: ConnectionConfig, database: str = "", *, redact: bool = False) -> str:
    """Render ``user[:password]@protocol(address)/database[?params]``.

    A non-empty ``database`` replaces ``config.database`` for this call only.
    With ``redact`` the password is rendered as ``***`` so the result can be logged.
    """

    database = database or config.database
    credentials = config.username
    if config.password:
        password = REDACTED if redact else config.password
        credentials = f"{config.username}:{password}"
    dsn = f"{credentials}@{config.protocol}({config.address})/{database}"
    return dsn + encode_params(config.protocol, config.params)


__all__ = ["REDACTED", "build_dsn"]
