"""Tests for driver selection and connection opening."""

from __future__ import annotations

import logging

import pytest

from tdengine_exporter.drivers import ConnectionFactory, DriverOpenError, DriverRegistry, driver_name_for
from tdengine_exporter.models import ConnectionConfig, HttpParams


class _FakeDriver:
    def __init__(self) -> None:
        self.dsns: list[str] = []

    def __call__(self, dsn: str) -> tuple[str, str]:
        self.dsns.append(dsn)
        return ("handle", dsn)


def test_driver_name_depends_only_on_protocol() -> None:
    assert driver_name_for("ws") == "taosWS"
    assert driver_name_for("http") == "taosRestful"
    assert driver_name_for("ws") == "taosWS"


def test_driver_name_rejects_unknown_protocol() -> None:
    with pytest.raises(DriverOpenError):
        driver_name_for("ftp")


def test_registry_rejects_non_callable_opener() -> None:
    registry = DriverRegistry()

    with pytest.raises(ValueError):
        registry.register("taosWS", "not callable")  # type: ignore[arg-type]


def test_registry_lists_names() -> None:
    registry = DriverRegistry({"taosWS": _FakeDriver()})
    registry.register("taosRestful", _FakeDriver())

    assert registry.names() == ["taosRestful", "taosWS"]


def test_open_selects_driver_by_protocol() -> None:
    ws, rest = _FakeDriver(), _FakeDriver()
    factory = ConnectionFactory(DriverRegistry({"taosWS": ws, "taosRestful": rest}))
    config = ConnectionConfig(
        username="foo",
        password="bar",
        protocol="http",
        address="127.0.0.1:6041",
        params=HttpParams(read_buffer_size=52428800),
    )

    handle = factory.open(config, "otel")

    assert ws.dsns == []
    assert rest.dsns == ["foo:bar@http(127.0.0.1:6041)/otel?disableCompression=false&readBufferSize=52428800"]
    assert handle == ("handle", rest.dsns[0])


def test_open_falls_back_to_configured_then_default_database() -> None:
    driver = _FakeDriver()
    factory = ConnectionFactory(DriverRegistry({"taosWS": driver}))

    factory.open(ConnectionConfig(database="telemetry"))
    factory.open(ConnectionConfig())

    assert driver.dsns == [
        "root@ws(localhost:6041)/telemetry",
        "root@ws(localhost:6041)/otel",
    ]


def test_open_does_not_leak_database_between_calls() -> None:
    driver = _FakeDriver()
    factory = ConnectionFactory(DriverRegistry({"taosWS": driver}))
    config = ConnectionConfig()

    factory.open(config, "first")
    factory.open(config)

    assert driver.dsns[-1] == "root@ws(localhost:6041)/otel"
    assert config.database == ""


def test_open_without_registered_driver_fails() -> None:
    factory = ConnectionFactory()

    with pytest.raises(DriverOpenError) as excinfo:
        factory.open(ConnectionConfig())

    assert excinfo.value.driver == "taosWS"


def test_open_surfaces_driver_errors_without_retry() -> None:
    calls: list[str] = []

    def _broken(dsn: str) -> None:
        calls.append(dsn)
        raise ConnectionRefusedError("boom")

    factory = ConnectionFactory(DriverRegistry({"taosWS": _broken}))

    with pytest.raises(DriverOpenError) as excinfo:
        factory.open(ConnectionConfig(password="secret"))

    assert len(calls) == 1
    assert isinstance(excinfo.value.__cause__, ConnectionRefusedError)
    assert "secret" not in str(excinfo.value)
    assert excinfo.value.dsn == "root:***@ws(localhost:6041)/otel"


@pytest.mark.parametrize("password", ["s3(cret", "p@ss", "a:b"])
def test_open_errors_hide_passwords_with_dsn_delimiters(password: str) -> None:
    seen: list[str] = []

    def _broken(dsn: str) -> None:
        seen.append(dsn)
        raise ConnectionRefusedError("boom")

    factory = ConnectionFactory(DriverRegistry({"taosWS": _broken}))

    with pytest.raises(DriverOpenError) as excinfo:
        factory.open(ConnectionConfig(password=password), "otel")

    assert seen == [f"root:{password}@ws(localhost:6041)/otel"]
    assert password not in str(excinfo.value)
    assert excinfo.value.dsn == "root:***@ws(localhost:6041)/otel"


def test_open_logs_redacted_dsn(caplog: pytest.LogCaptureFixture) -> None:
    factory = ConnectionFactory(DriverRegistry({"taosWS": lambda dsn: dsn}))

    with caplog.at_level(logging.DEBUG, logger="tdengine_exporter.drivers"):
        factory.open(ConnectionConfig(password="s3(cret"), "otel")

    assert caplog.records
    assert all("s3(cret" not in str(record.__dict__) for record in caplog.records)
    assert caplog.records[-1].dsn == "root:***@ws(localhost:6041)/otel"
