"""Dispatcher de mensagens: classifica cada evento e roteia para o fluxo.

Ordem de classificação de texto (a primeira que casar encerra):
cancelar, agenda do dia, saudação, envio de mídia de exemplo, fluxo do
assistente ativo, fluxo de cita ativo e, por fim, o menu principal.
Botões sempre descartam o estado anterior antes de iniciar a opção.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from datetime import datetime
from typing import TYPE_CHECKING

from app.constants import replies
from app.constants.whatsapp import ButtonId
from app.domain.appointment import AppointmentDraft
from app.domain.conversation import AssistantDraft
from app.domain.inbound import InboundEventKind
from app.observability import get_correlation_id
from app.protocols.models import MediaKind
from config.logging import log_fallback, user_ref
from utils.errors import GatewayError, PersistenceError

if TYPE_CHECKING:
    from collections.abc import Callable
    from zoneinfo import ZoneInfo

    from app.domain.inbound import InboundEvent
    from app.protocols.calendar_service import CalendarServiceProtocol
    from app.protocols.conversation_store import ConversationStoreProtocol
    from app.protocols.outbound_gateway import OutboundGatewayProtocol
    from app.services.appointment_flow import AppointmentFlow
    from app.services.assistant_flow import AssistantFlow
    from app.services.followup_scheduler import FollowUpScheduler
    from config.settings import ClinicSettings

logger = logging.getLogger(__name__)

_COMPONENT = "message_handler"

CANCEL_KEYWORDS = frozenset({"cancelar", "cancel"})
AGENDA_KEYWORDS = frozenset({"citas hoy", "agenda"})
MEDIA_KEYWORDS = frozenset({"send media"})
GREETINGS = ("hi", "hello", "hey", "hola", "buenas", "buenos dias")

# Palavra inteira, não substring: "holanda" e "they" não são saudações.
_GREETING_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(word) for word in GREETINGS) + r")\b"
)


def normalize_command(text: str) -> str:
    """Minúsculas, sem acentos e com espaços colapsados."""
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return " ".join(without_marks.split())


def is_greeting(text: str) -> bool:
    """Saudação como palavra ou expressão inteira ("hola!", "buenos días")."""
    return _GREETING_PATTERN.search(normalize_command(text)) is not None


class MessageHandler:
    """Núcleo do atendimento.

    Processa um evento por vez por usuário (lock do store). Nenhuma
    exceção escapa de `handle`: o backstop limpa o estado do usuário e
    envia um pedido de desculpas.
    """

    def __init__(
        self,
        *,
        gateway: OutboundGatewayProtocol,
        store: ConversationStoreProtocol,
        scheduler: FollowUpScheduler,
        appointment_flow: AppointmentFlow,
        assistant_flow: AssistantFlow,
        clinic: ClinicSettings,
        zone: ZoneInfo,
        calendar: CalendarServiceProtocol | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._scheduler = scheduler
        self._appointment = appointment_flow
        self._assistant = assistant_flow
        self._clinic = clinic
        self._zone = zone
        self._calendar = calendar
        self._now = now or (lambda: datetime.now(zone))

    async def handle(self, event: InboundEvent) -> None:
        user_id = event.sender_id
        async with self._store.locked(user_id):
            try:
                if event.message_id:
                    await self._gateway.mark_read(event.message_id)
                if event.kind is InboundEventKind.BUTTON_REPLY:
                    await self._handle_button(event)
                else:
                    await self._handle_text(event)
            except Exception as exc:
                await self._recover(user_id, exc)

    async def _handle_text(self, event: InboundEvent) -> None:
        user_id = event.sender_id
        command = normalize_command(event.text)

        if command in CANCEL_KEYWORDS:
            await self._cancel(user_id)
            return
        if command in AGENDA_KEYWORDS:
            await self._send_agenda(user_id)
            return
        if is_greeting(event.text):
            await self._greet(event)
            return
        if command in MEDIA_KEYWORDS:
            await self._send_sample_media(user_id)
            return

        state = self._store.get(user_id)
        if isinstance(state, AssistantDraft):
            self._scheduler.cancel(user_id)
            await self._assistant.handle(
                user_id,
                event.text,
                user_name=replies.sender_display_name(event.profile_name, user_id),
                message_id=event.message_id,
            )
            return
        if isinstance(state, AppointmentDraft):
            self._scheduler.cancel(user_id)
            await self._appointment.handle(user_id, state, event.text)
            return

        self._log_route(user_id, "menu")
        self._scheduler.cancel(user_id)
        await self._send_menu(user_id)

    async def _handle_button(self, event: InboundEvent) -> None:
        user_id = event.sender_id
        self._reset(user_id)
        self._log_route(user_id, f"button:{event.button_id}")

        match event.button_id:
            case ButtonId.SCHEDULE:
                await self._appointment.start(user_id)
            case ButtonId.SERVICES:
                await self._assistant.start(user_id)
            case ButtonId.LOCATION | ButtonId.SPEAK_TO_AGENT:
                await self._send_location(user_id)
            case ButtonId.EMERGENCY:
                await self._send_emergency(user_id)
            case _:
                await self._gateway.send_text(user_id, replies.UNKNOWN_OPTION)
                await self._send_menu(user_id)

    async def _cancel(self, user_id: str) -> None:
        had_state = self._reset(user_id)
        self._log_route(user_id, "cancel", result="cancelled" if had_state else "noop")
        await self._gateway.send_text(
            user_id,
            replies.CANCELLED if had_state else replies.NOTHING_TO_CANCEL,
        )
        await self._send_menu(user_id)

    async def _greet(self, event: InboundEvent) -> None:
        user_id = event.sender_id
        self._reset(user_id)
        self._log_route(user_id, "greeting")
        name = replies.sender_display_name(event.profile_name, user_id)
        await self._gateway.send_text(
            user_id,
            replies.welcome(name),
            reply_to_message_id=event.message_id,
        )
        await self._send_menu(user_id)

    async def _send_agenda(self, user_id: str) -> None:
        self._log_route(user_id, "agenda")
        today = self._now().date()
        if self._calendar is None:
            log_fallback(logger, _COMPONENT, reason="calendar_disabled")
            await self._gateway.send_text(user_id, replies.AGENDA_ERROR)
            return
        try:
            events = await self._calendar.list_events_for_date(today)
        except PersistenceError:
            log_fallback(logger, _COMPONENT, reason="agenda_unavailable")
            await self._gateway.send_text(user_id, replies.AGENDA_ERROR)
            return

        if not events:
            await self._gateway.send_text(user_id, replies.AGENDA_EMPTY)
            return
        ordered = sorted(events, key=lambda item: item.start)
        lines = [
            (item.start.astimezone(self._zone).strftime("%H:%M"), item.summary)
            for item in ordered
        ]
        await self._gateway.send_text(
            user_id,
            replies.agenda_listing(today.strftime("%d/%m/%Y"), lines),
        )

    async def _send_sample_media(self, user_id: str) -> None:
        self._log_route(user_id, "media")
        try:
            await self._gateway.send_media(
                user_id,
                MediaKind(self._clinic.sample_media_kind),
                self._clinic.sample_media_url,
                caption=self._clinic.sample_media_caption,
            )
        except GatewayError:
            log_fallback(logger, _COMPONENT, reason="media_send_failed")
            await self._gateway.send_text(user_id, replies.MEDIA_ERROR)

    async def _send_location(self, user_id: str) -> None:
        clinic = self._clinic
        try:
            await self._gateway.send_text(user_id, replies.LOCATION_HEADER)
            await self._gateway.send_location(user_id)
            await self._gateway.send_text(
                user_id,
                replies.business_hours(clinic.business_hours, clinic.emergency_phone),
            )
        except GatewayError:
            log_fallback(logger, _COMPONENT, reason="location_send_failed")
            await self._gateway.send_text(
                user_id,
                replies.location_fallback(clinic.address, clinic.emergency_phone, clinic.email),
            )

    async def _send_emergency(self, user_id: str) -> None:
        try:
            await self._gateway.send_text(user_id, replies.EMERGENCY_HEADER)
            await self._gateway.send_contact(user_id)
        except GatewayError:
            log_fallback(logger, _COMPONENT, reason="contact_send_failed")
            await self._gateway.send_text(
                user_id,
                replies.emergency_fallback(self._clinic.emergency_phone, self._clinic.email),
            )

    async def _send_menu(self, user_id: str) -> None:
        await self._gateway.send_buttons(
            user_id, replies.MENU_PROMPT, replies.MAIN_MENU_BUTTONS
        )

    def _reset(self, user_id: str) -> bool:
        """Descarta estado e follow-up pendente. Retorna True se havia fluxo."""
        self._scheduler.cancel(user_id)
        return self._store.clear(user_id)

    async def _recover(self, user_id: str, exc: Exception) -> None:
        self._reset(user_id)
        logger.error(
            "message_handling_failed",
            extra={
                "component": _COMPONENT,
                "action": "handle",
                "result": "state_reset",
                "error_type": type(exc).__name__,
                "user_ref": user_ref(user_id),
                "correlation_id": get_correlation_id(),
            },
            exc_info=not isinstance(exc, GatewayError),
        )
        try:
            await self._gateway.send_text(user_id, replies.GENERIC_APOLOGY)
        except GatewayError:
            logger.warning(
                "apology_send_failed",
                extra={
                    "component": _COMPONENT,
                    "action": "recover",
                    "result": "failed",
                    "user_ref": user_ref(user_id),
                    "correlation_id": get_correlation_id(),
                },
            )

    def _log_route(self, user_id: str, route: str, *, result: str = "ok") -> None:
        logger.info(
            "message_routed",
            extra={
                "component": _COMPONENT,
                "action": "route",
                "route": route,
                "result": result,
                "user_ref": user_ref(user_id),
                "correlation_id": get_correlation_id(),
            },
        )
