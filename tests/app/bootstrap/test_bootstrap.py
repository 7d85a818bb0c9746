"""Testes do composition root: validação de settings e container."""

from __future__ import annotations

import httpx
import pytest

import app.bootstrap as bootstrap
import app.bootstrap.dependencies as dependencies
from app.bootstrap.dependencies import (
    AppContainer,
    build_container,
    create_calendar_service,
    create_sheets_service,
)
from app.domain.inbound import InboundEvent
from app.infra.stores import MemoryConversationStore, MemoryDedupeStore
from app.services.message_handler import MessageHandler
from config.settings import (
    BaseSettings,
    CalendarSettings,
    ClinicSettings,
    ConversationSettings,
    OpenRouterSettings,
    SheetsSettings,
    WhatsAppSettings,
)
from tests.fakes.fake_calendar_service import FakeCalendarService
from tests.fakes.fake_sheets_service import FakeSheetsService

VALID_WHATSAPP = WhatsAppSettings(
    verify_token="verify", access_token="token", phone_number_id="123"
)
VALID_OPENROUTER = OpenRouterSettings(api_key="sk-test")
DISABLED_CALENDAR = CalendarSettings(calendar_enabled=False)
DISABLED_SHEETS = SheetsSettings(sheets_enabled=False)


def _patch_settings(
    monkeypatch: pytest.MonkeyPatch,
    module: object,
    *,
    environment: str = "development",
    whatsapp: WhatsAppSettings = VALID_WHATSAPP,
    openrouter: OpenRouterSettings = VALID_OPENROUTER,
    calendar: CalendarSettings = DISABLED_CALENDAR,
    sheets: SheetsSettings = DISABLED_SHEETS,
) -> None:
    overrides = {
        "get_base_settings": BaseSettings(environment=environment),
        "get_conversation_settings": ConversationSettings(),
        "get_whatsapp_settings": whatsapp,
        "get_openrouter_settings": openrouter,
        "get_calendar_settings": calendar,
        "get_sheets_settings": sheets,
        "get_clinic_settings": ClinicSettings(),
    }
    for name, value in overrides.items():
        if hasattr(module, name):
            monkeypatch.setattr(module, name, lambda value=value: value)


class TestCollectSettingsErrors:
    def test_valid_settings_have_no_errors(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_settings(monkeypatch, bootstrap)

        assert bootstrap.collect_settings_errors() == []

    def test_errors_are_prefixed_by_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_settings(
            monkeypatch,
            bootstrap,
            whatsapp=WhatsAppSettings(),
            calendar=CalendarSettings(),
        )

        errors = bootstrap.collect_settings_errors()

        assert "whatsapp: WHATSAPP_VERIFY_TOKEN não configurado" in errors
        assert "calendar: GOOGLE_CALENDAR_ID não configurado" in errors
        assert not any(error.startswith("sheets:") for error in errors)


class TestValidateRuntimeSettings:
    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_settings(monkeypatch, bootstrap, whatsapp=WhatsAppSettings())

        bootstrap.validate_runtime_settings()

    @pytest.mark.parametrize("environment", ["staging", "production"])
    def test_strict_environments_fail_fast(
        self,
        monkeypatch: pytest.MonkeyPatch,
        environment: str,
    ) -> None:
        _patch_settings(
            monkeypatch,
            bootstrap,
            environment=environment,
            whatsapp=WhatsAppSettings(),
        )

        with pytest.raises(RuntimeError, match=environment):
            bootstrap.validate_runtime_settings()

    def test_production_with_valid_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _patch_settings(monkeypatch, bootstrap, environment="production")

        bootstrap.validate_runtime_settings()


class TestGoogleServiceFactories:
    def test_calendar_disabled(self) -> None:
        assert create_calendar_service(DISABLED_CALENDAR) is None

    def test_calendar_without_credentials_is_degraded(self) -> None:
        settings = CalendarSettings(google_calendar_id="cal@group")

        assert create_calendar_service(settings) is None

    def test_sheets_disabled(self) -> None:
        assert create_sheets_service(DISABLED_SHEETS) is None

    def test_sheets_without_spreadsheet_is_degraded(self) -> None:
        assert create_sheets_service(SheetsSettings()) is None


class TestBuildContainer:
    @pytest.mark.asyncio
    async def test_builds_graph_with_shared_store(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _patch_settings(monkeypatch, dependencies)
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))

        async with httpx.AsyncClient(transport=transport) as client:
            container = build_container(client)

        assert isinstance(container, AppContainer)
        assert isinstance(container.store, MemoryConversationStore)
        assert isinstance(container.dedupe, MemoryDedupeStore)
        assert isinstance(container.handler, MessageHandler)
        assert not container.scheduler.pending("5511")

    @pytest.mark.asyncio
    async def test_explicit_services_are_used(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        _patch_settings(monkeypatch, dependencies)
        calendar = FakeCalendarService()
        sheets = FakeSheetsService()

        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"messages": [{"id": "wamid.OUT"}]})
        )

        async with httpx.AsyncClient(transport=transport) as client:
            container = build_container(client, calendar=calendar, sheets=sheets)
            await container.handler.handle(InboundEvent.text_message("5511", "agenda"))

        assert len(calendar.listed_days) == 1
