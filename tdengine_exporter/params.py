"""Serialize per-protocol connection options into a DSN query suffix."""

from __future__ import annotations

from typing import Callable, Mapping

from .models import HttpParams, ProtocolParams, WsParams

# (driver key, dataclass field, renderer); a renderer returning None omits the key.
ParamRule = tuple[str, str, Callable[[object], "str | None"]]


def _flag(value: object) -> str:
    return "true" if value else "false"


def _present(value: object) -> str | None:
    return str(value) if value else None


def _positive(value: object) -> str | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return str(value) if value > 0 else None


_WS_RULES: tuple[ParamRule, ...] = (
    ("readTimeout", "read_timeout", _present),
    ("writeTimeout", "write_timeout", _present),
)

_HTTP_RULES: tuple[ParamRule, ...] = (
    ("disableCompression", "disable_compression", _flag),
    ("readBufferSize", "read_buffer_size", _positive),
)

# Keys are emitted in rule order; drivers may not parse them order-insensitively.
PARAM_RULES: Mapping[str, tuple[type, tuple[ParamRule, ...]]] = {
    "ws": (WsParams, _WS_RULES),
    "http": (HttpParams, _HTTP_RULES),
}


def encode_params(protocol: str, params: ProtocolParams | None) -> str:
    """Return ``?k1=v1&k2=v2`` for the protocol's options, or ``""`` when none apply."""

    entry = PARAM_RULES.get(protocol)
    if entry is None:
        return ""
    params_type, rules = entry
    if params is None:
        params = params_type()
    elif not isinstance(params, params_type):
        return ""
    pairs: list[str] = []
    for key, attr, render in rules:
        value = render(getattr(params, attr))
        if value is not None:
            pairs.append(f"{key}={value}")
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


__all__ = ["PARAM_RULES", "encode_params"]
