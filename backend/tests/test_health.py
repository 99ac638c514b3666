from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from plusgrid.api import health
from plusgrid.core.log import configure_logging
from plusgrid.core.settings import Settings


def test_healthz(client: TestClient) -> None:
    r = client.get("/healthz")
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "ok"}


def test_readyz(client: TestClient) -> None:
    r = client.get("/readyz")
    assert r.status_code == 200, r.text
    assert r.json() == {"status": "ready"}


def test_readyz_not_ready_on_probe_mismatch(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(health, "_PROBE_CODE", "8FVC9G8F+6W")
    r = client.get("/readyz")
    assert r.status_code == 503, r.text
    assert r.json() == {"status": "not_ready"}


def test_unknown_route_uses_error_envelope(client: TestClient) -> None:
    r = client.get("/v2/nothing")
    assert r.status_code == 404, r.text
    body = r.json()
    assert body["code"] == "HTTP_ERROR"
    assert body["trace_id"]


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLUSGRID_DEFAULT_CODE_LENGTH", "12")
    monkeypatch.setenv("PLUSGRID_DEFAULT_MAXIMUM_TRUNCATION", "8")
    settings = Settings()
    assert settings.default_code_length == 12
    assert settings.default_maximum_truncation == 8


@pytest.mark.parametrize(
    "name,value",
    [
        ("PLUSGRID_DEFAULT_MAXIMUM_TRUNCATION", "5"),
        ("PLUSGRID_DEFAULT_MAXIMUM_TRUNCATION", "10"),
        ("PLUSGRID_DEFAULT_MAXIMUM_TRUNCATION", "0"),
        ("PLUSGRID_DEFAULT_CODE_LENGTH", "7"),
        ("PLUSGRID_DEFAULT_CODE_LENGTH", "1"),
    ],
)
def test_settings_reject_unusable_code_options(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        Settings()


def test_default_code_length_from_settings(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    from plusgrid.core.settings import get_settings

    monkeypatch.setenv("PLUSGRID_DEFAULT_CODE_LENGTH", "11")
    get_settings.cache_clear()
    r = client.post("/v1/codes/encode", json={"latitude": 51.3701125, "longitude": -1.217765625})
    assert r.status_code == 200, r.text
    assert r.json()["code"] == "9C3W9QCJ+2VX"


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging("DEBUG")
    handlers = len(logger.handlers)
    configure_logging("WARNING")
    assert len(logger.handlers) == handlers
    assert logger.level == logging.WARNING
