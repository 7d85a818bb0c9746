"""Factories de dependências: criação das implementações concretas.

Monta o grafo do atendimento a partir das settings. Integrações Google
desligadas ou sem credenciais ficam como None e o fluxo de cita opera
em modo degradado.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from api.connectors.whatsapp.http_client import create_whatsapp_http_client
from app.bootstrap.whatsapp_adapters import GraphApiNormalizer, GraphApiOutboundGateway
from app.infra.ai import OpenRouterKnowledgeClient
from app.infra.calendar.google_calendar_client import GoogleCalendarClient
from app.infra.sheets.google_sheets_client import GoogleSheetsClient
from app.infra.stores import MemoryConversationStore, MemoryDedupeStore
from app.services.appointment_flow import AppointmentFlow
from app.services.assistant_flow import AssistantFlow
from app.services.followup_scheduler import FollowUpScheduler
from app.services.message_handler import MessageHandler
from app.use_cases.whatsapp import ProcessInboundUseCase
from config.settings import (
    get_calendar_settings,
    get_clinic_settings,
    get_conversation_settings,
    get_openrouter_settings,
    get_sheets_settings,
    get_whatsapp_settings,
)

if TYPE_CHECKING:
    import httpx

    from app.protocols.calendar_service import CalendarServiceProtocol
    from app.protocols.sheets_service import SheetsServiceProtocol
    from config.settings import CalendarSettings, SheetsSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppContainer:
    """Dependências de longa duração do processo."""

    store: MemoryConversationStore
    dedupe: MemoryDedupeStore
    scheduler: FollowUpScheduler
    handler: MessageHandler
    process_inbound: ProcessInboundUseCase


def create_calendar_service(settings: CalendarSettings) -> CalendarServiceProtocol | None:
    """Cria o cliente Calendar ou None quando desligado/sem credenciais."""
    if not settings.calendar_enabled:
        logger.info("calendar_disabled", extra={"component": "bootstrap"})
        return None
    if settings.validate_config():
        logger.warning(
            "calendar_not_configured",
            extra={"component": "bootstrap", "result": "degraded"},
        )
        return None
    return GoogleCalendarClient.from_settings(settings)


def create_sheets_service(settings: SheetsSettings) -> SheetsServiceProtocol | None:
    """Cria o cliente Sheets ou None quando desligado/sem credenciais."""
    if not settings.sheets_enabled:
        logger.info("sheets_disabled", extra={"component": "bootstrap"})
        return None
    if settings.validate_config():
        logger.warning(
            "sheets_not_configured",
            extra={"component": "bootstrap", "result": "degraded"},
        )
        return None
    return GoogleSheetsClient.from_settings(settings)


def build_container(
    http_client: httpx.AsyncClient,
    *,
    calendar: CalendarServiceProtocol | None = None,
    sheets: SheetsServiceProtocol | None = None,
) -> AppContainer:
    """Monta o container usando o httpx.AsyncClient compartilhado.

    `calendar`/`sheets` explícitos substituem a criação a partir das
    settings.
    """
    whatsapp = get_whatsapp_settings()
    clinic = get_clinic_settings()
    conversation = get_conversation_settings()
    calendar_settings = get_calendar_settings()
    zone = ZoneInfo(calendar_settings.calendar_timezone)

    if calendar is None:
        calendar = create_calendar_service(calendar_settings)
    if sheets is None:
        sheets = create_sheets_service(get_sheets_settings())

    gateway = GraphApiOutboundGateway(
        settings=whatsapp,
        clinic=clinic,
        http_client=create_whatsapp_http_client(whatsapp, http_client),
    )
    store = MemoryConversationStore(idle_timeout_seconds=conversation.idle_timeout_seconds)
    dedupe = MemoryDedupeStore()
    scheduler = FollowUpScheduler()

    appointment_flow = AppointmentFlow(
        gateway=gateway,
        store=store,
        scheduler=scheduler,
        clinic=clinic,
        zone=zone,
        calendar=calendar,
        sheets=sheets,
        followup_delay_seconds=conversation.followup_delay_seconds,
    )
    assistant_flow = AssistantFlow(
        gateway=gateway,
        knowledge=OpenRouterKnowledgeClient(get_openrouter_settings(), http_client),
        store=store,
        scheduler=scheduler,
        clinic=clinic,
        timeout_seconds=conversation.knowledge_timeout_seconds,
        followup_delay_seconds=conversation.followup_delay_seconds,
    )
    handler = MessageHandler(
        gateway=gateway,
        store=store,
        scheduler=scheduler,
        appointment_flow=appointment_flow,
        assistant_flow=assistant_flow,
        clinic=clinic,
        zone=zone,
        calendar=calendar,
    )
    process_inbound = ProcessInboundUseCase(
        normalizer=GraphApiNormalizer(),
        dedupe=dedupe,
        handler=handler,
        dedupe_ttl_seconds=conversation.dedupe_ttl_seconds,
    )
    logger.info(
        "container_built",
        extra={
            "component": "bootstrap",
            "calendar_enabled": calendar is not None,
            "sheets_enabled": sheets is not None,
        },
    )
    return AppContainer(
        store=store,
        dedupe=dedupe,
        scheduler=scheduler,
        handler=handler,
        process_inbound=process_inbound,
    )
