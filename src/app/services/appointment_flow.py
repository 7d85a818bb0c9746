"""Fluxo de agendamento de cita passo a passo.

Cada mensagem de texto avança no máximo um passo do formulário. O passo
de hora consulta a agenda antes de avançar; o passo de pago dispara a
conclusão (Calendar + Sheets) e o rascunho é descartado em qualquer
desfecho.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.constants import replies
from app.domain.appointment import AppointmentDraft
from app.observability import get_correlation_id
from app.services.conflict_checker import check_slot
from config.logging import log_fallback, user_ref
from fsm.rules.validators import parse_appointment_datetime
from fsm.states.appointment import AppointmentStep
from utils.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Callable
    from zoneinfo import ZoneInfo

    from app.domain.appointment import CalendarEvent
    from app.protocols.calendar_service import CalendarServiceProtocol
    from app.protocols.conversation_store import ConversationStoreProtocol
    from app.protocols.outbound_gateway import OutboundGatewayProtocol
    from app.protocols.sheets_service import SheetsServiceProtocol
    from app.services.followup_scheduler import FollowUpScheduler
    from config.settings import ClinicSettings

logger = logging.getLogger(__name__)

_COMPONENT = "appointment_flow"

REGISTERED_AT_FORMAT = "%d/%m/%Y, %H:%M:%S"

# Texto de nova tentativa por passo
_RETRY_PROMPTS: dict[AppointmentStep, str] = {
    AppointmentStep.NAME: replies.INVALID_NAME,
    AppointmentStep.DATE: replies.INVALID_DATE,
    AppointmentStep.TIME: replies.INVALID_TIME,
    AppointmentStep.CONSULTA: replies.INVALID_CONSULTA,
    AppointmentStep.MONTO: replies.INVALID_MONTO,
    AppointmentStep.PROVEEDOR: replies.INVALID_PROVEEDOR,
    AppointmentStep.RIF: replies.INVALID_RIF,
    AppointmentStep.PAGO: replies.INVALID_PAGO,
}

# Pergunta seguinte, a partir do valor que acabou de ser aceito
_NEXT_PROMPTS: dict[AppointmentStep, Callable[[str], str]] = {
    AppointmentStep.NAME: replies.ask_date,
    AppointmentStep.DATE: replies.ask_time,
    AppointmentStep.TIME: replies.ask_consulta,
    AppointmentStep.CONSULTA: replies.ask_monto,
    AppointmentStep.MONTO: replies.ask_proveedor,
    AppointmentStep.PROVEEDOR: replies.ask_rif,
    AppointmentStep.RIF: replies.ask_pago,
}


class AppointmentFlow:
    """Conduz o formulário de cita de um usuário.

    Calendar e Sheets são opcionais: sem Calendar não há checagem de
    conflito e a confirmação sai na variante degradada; sem Sheets a
    linha simplesmente não é gravada.
    """

    def __init__(
        self,
        *,
        gateway: OutboundGatewayProtocol,
        store: ConversationStoreProtocol,
        scheduler: FollowUpScheduler,
        clinic: ClinicSettings,
        zone: ZoneInfo,
        calendar: CalendarServiceProtocol | None = None,
        sheets: SheetsServiceProtocol | None = None,
        followup_delay_seconds: float = 1.0,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._scheduler = scheduler
        self._clinic = clinic
        self._zone = zone
        self._calendar = calendar
        self._sheets = sheets
        self._followup_delay = followup_delay_seconds
        self._now = now or (lambda: datetime.now(zone))

    async def start(self, user_id: str) -> None:
        """Cria um rascunho novo (substitui qualquer estado) e pede o nome."""
        self._store.set(user_id, AppointmentDraft())
        logger.info(
            "appointment_flow_started",
            extra={
                "component": _COMPONENT,
                "action": "start",
                "user_ref": user_ref(user_id),
                "correlation_id": get_correlation_id(),
            },
        )
        await self._gateway.send_text(user_id, replies.APPOINTMENT_START)

    async def handle(self, user_id: str, draft: AppointmentDraft, text: str) -> None:
        """Processa a resposta do usuário para o passo atual do rascunho."""
        machine = draft.to_machine()
        step = machine.current_step
        result = machine.evaluate(text, self._now().date())
        if not result.allowed or result.value is None:
            self._log_step(user_id, step, "rejected", reason=result.reason)
            await self._gateway.send_text(user_id, _RETRY_PROMPTS[step])
            return

        value = result.value
        if step is AppointmentStep.TIME and await self._slot_taken(draft, value):
            self._log_step(user_id, step, "rejected", reason="slot_conflict")
            await self._gateway.send_text(
                user_id,
                replies.slot_unavailable(draft.date or "", self._clinic.alternative_slots),
            )
            return

        transition = machine.commit(value)
        if not transition.success:
            # Rascunho inconsistente com a máquina: descarta e deixa o
            # dispatcher tratar como erro inesperado.
            raise RuntimeError(f"appointment_commit_failed: {transition.error_reason}")

        updated = AppointmentDraft.from_machine(machine)
        self._log_step(user_id, step, "accepted")
        if updated.is_complete:
            await self.complete(user_id, updated)
            return

        self._store.set(user_id, updated)
        await self._gateway.send_text(user_id, _NEXT_PROMPTS[step](value))

    async def complete(self, user_id: str, draft: AppointmentDraft) -> None:
        """Conclui a cita: Calendar, Sheets, confirmação e informações.

        O rascunho é removido mesmo se algum envio falhar.
        """
        try:
            event = await self._create_calendar_event(draft)
            await self._append_sheet_row(draft, event)
            if event is not None:
                message = replies.confirmation(draft, event)
            else:
                log_fallback(logger, _COMPONENT, reason="calendar_not_synced")
                message = replies.degraded_confirmation(draft)
            await self._gateway.send_text(user_id, message)
            await self._gateway.send_text(
                user_id,
                replies.appointment_info(self._clinic.emergency_phone),
            )
        finally:
            self._store.clear(user_id)

        logger.info(
            "appointment_completed",
            extra={
                "component": _COMPONENT,
                "action": "complete",
                "result": "ok" if event is not None else "degraded",
                "user_ref": user_ref(user_id),
                "correlation_id": get_correlation_id(),
            },
        )
        self._scheduler.schedule(
            user_id,
            self._followup_delay,
            lambda: self._gateway.send_buttons(
                user_id, replies.MENU_PROMPT, replies.MAIN_MENU_BUTTONS
            ),
        )

    async def _slot_taken(self, draft: AppointmentDraft, time_text: str) -> bool:
        if self._calendar is None:
            return False
        candidate = parse_appointment_datetime(draft.date or "", time_text, self._zone)
        if candidate is None:
            return False
        window = timedelta(minutes=self._clinic.conflict_window_minutes)
        return await check_slot(self._calendar, candidate, window)

    async def _create_calendar_event(self, draft: AppointmentDraft) -> CalendarEvent | None:
        if self._calendar is None:
            return None
        try:
            return await self._calendar.create_event(draft)
        except PersistenceError as exc:
            self._log_persistence_error(exc)
            return None

    async def _append_sheet_row(
        self,
        draft: AppointmentDraft,
        event: CalendarEvent | None,
    ) -> None:
        if self._sheets is None:
            return
        row = draft.to_sheet_row(
            event.event_id if event is not None else None,
            self._now().strftime(REGISTERED_AT_FORMAT),
        )
        try:
            await self._sheets.append_row(row)
        except PersistenceError as exc:
            self._log_persistence_error(exc)

    def _log_step(
        self,
        user_id: str,
        step: AppointmentStep,
        result: str,
        *,
        reason: str | None = None,
    ) -> None:
        logger.info(
            "appointment_step_processed",
            extra={
                "component": _COMPONENT,
                "action": "step",
                "step": step.value,
                "result": result,
                "reason": reason,
                "user_ref": user_ref(user_id),
                "correlation_id": get_correlation_id(),
            },
        )

    def _log_persistence_error(self, exc: PersistenceError) -> None:
        logger.warning(
            "appointment_persistence_failed",
            extra={
                "component": _COMPONENT,
                "action": exc.operation,
                "result": "failed",
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )
