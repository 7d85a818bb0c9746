"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from api.routes.health import router as health
from config.settings import (
    CalendarSettings,
    OpenRouterSettings,
    SheetsSettings,
    WhatsAppSettings,
)


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        health,
        "get_whatsapp_settings",
        lambda: WhatsAppSettings(access_token="t", phone_number_id="123"),
    )
    monkeypatch.setattr(health, "get_openrouter_settings", lambda: OpenRouterSettings())
    monkeypatch.setattr(
        health,
        "get_calendar_settings",
        lambda: CalendarSettings(calendar_enabled=False),
    )
    monkeypatch.setattr(health, "get_sheets_settings", lambda: SheetsSettings())


@pytest.mark.asyncio
async def test_service_info() -> None:
    payload = await health.service_info()

    assert payload["status"] == "running"
    assert payload["version"] == health.SERVICE_VERSION


@pytest.mark.asyncio
async def test_health_check() -> None:
    response = await health.health_check()

    assert response.status == "healthy"


@pytest.mark.asyncio
@pytest.mark.usefixtures("configured")
async def test_readiness_ready_with_degraded_optional_dependencies() -> None:
    request = _build_request_with_state(SimpleNamespace(container=object()))

    response = await health.readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"
    assert payload["checks"]["whatsapp"]["status"] == "ok"
    assert payload["checks"]["openrouter"]["status"] == "degraded"
    assert payload["checks"]["calendar"]["status"] == "disabled"
    assert payload["checks"]["sheets"]["status"] == "degraded"


@pytest.mark.asyncio
@pytest.mark.usefixtures("configured")
async def test_readiness_not_ready_without_container() -> None:
    request = _build_request_with_state(SimpleNamespace(container=None))

    response = await health.readiness_check(request)

    assert response.status_code == 503


@pytest.mark.asyncio
async def test_readiness_not_ready_without_whatsapp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(health, "get_whatsapp_settings", lambda: WhatsAppSettings())
    request = _build_request_with_state(SimpleNamespace(container=object()))

    response = await health.readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["whatsapp"] == {"status": "failed", "error": "not_configured"}
