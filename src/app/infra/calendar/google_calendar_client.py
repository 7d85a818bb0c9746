"""Client concreto de Google Calendar para o fluxo de agendamento."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.infra.calendar.google_calendar_parsers import (
    http_status,
    map_calendar_event,
    map_calendar_events,
)
from app.observability import get_correlation_id
from app.protocols.calendar_service import CalendarServiceProtocol
from config.settings.google import CALENDAR_SCOPE
from fsm.rules.validators import parse_appointment_datetime
from utils.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.appointment import AppointmentDraft, CalendarEvent
    from config.settings.google import CalendarSettings

logger = logging.getLogger(__name__)

_COMPONENT = "google_calendar_client"


def build_event_body(
    draft: AppointmentDraft,
    start_dt: datetime,
    *,
    timezone: str,
    duration_min: int = 60,
    reminder_email_min: int = 24 * 60,
    reminder_popup_min: int = 60,
) -> dict[str, Any]:
    """Monta o corpo do events.insert para uma cita."""
    end_dt = start_dt + timedelta(minutes=duration_min)
    description = "\n".join(
        (
            f"👤 Paciente: {draft.name}",
            f"📅 Fecha: {draft.date}",
            f"🕐 Hora: {draft.time}",
            f"💬 Tipo de consulta: {draft.consulta}",
            f"💰 Monto: ${draft.monto}",
            f"🏥 Proveedor: {draft.proveedor}",
            f"📋 RIF: {draft.rif}",
            f"💳 Método de pago: {draft.pago}",
            "📱 Agendado vía WhatsApp Bot",
        )
    )
    return {
        "summary": f"📅 Cita: {draft.name} - {draft.consulta}",
        "description": description,
        "start": {"dateTime": start_dt.isoformat(), "timeZone": timezone},
        "end": {"dateTime": end_dt.isoformat(), "timeZone": timezone},
        "reminders": {
            "useDefault": False,
            "overrides": [
                {"method": "email", "minutes": reminder_email_min},
                {"method": "popup", "minutes": reminder_popup_min},
            ],
        },
    }


class GoogleCalendarClient(CalendarServiceProtocol):
    """Implementacao do protocolo de calendario usando API v3 do Google.

    Chamadas da lib do Google sao sincronas: rodam em thread e com
    timeout, e qualquer falha vira PersistenceError.
    """

    __slots__ = (
        "_calendar_id",
        "_duration_min",
        "_reminders",
        "_service",
        "_timeout",
        "_timezone",
        "_zone",
    )

    def __init__(
        self,
        *,
        calendar_id: str,
        service: Any,
        timezone: str,
        duration_min: int = 60,
        reminder_email_min: int = 24 * 60,
        reminder_popup_min: int = 60,
        timeout_seconds: float = 20.0,
    ) -> None:
        self._calendar_id = calendar_id
        self._service = service
        self._timezone = timezone
        self._zone = ZoneInfo(timezone)
        self._duration_min = duration_min
        self._reminders = (reminder_email_min, reminder_popup_min)
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(cls, settings: CalendarSettings) -> GoogleCalendarClient:
        credentials = service_account.Credentials.from_service_account_info(
            settings.credentials.to_service_account_info(),
            scopes=[CALENDAR_SCOPE],
        )
        service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
        return cls(
            calendar_id=settings.google_calendar_id,
            service=service,
            timezone=settings.calendar_timezone,
            duration_min=settings.event_duration_min,
            reminder_email_min=settings.reminder_email_min,
            reminder_popup_min=settings.reminder_popup_min,
            timeout_seconds=settings.request_timeout_seconds,
        )

    async def create_event(self, draft: AppointmentDraft) -> CalendarEvent:
        start_dt = parse_appointment_datetime(draft.date or "", draft.time or "", self._zone)
        if start_dt is None:
            raise PersistenceError("invalid_appointment_datetime", operation="create_event")
        email_min, popup_min = self._reminders
        body = build_event_body(
            draft,
            start_dt,
            timezone=self._timezone,
            duration_min=self._duration_min,
            reminder_email_min=email_min,
            reminder_popup_min=popup_min,
        )
        response = await self._call("create_event", self._insert_event_sync, body)
        event = map_calendar_event(response, self._zone)
        logger.info(
            "google_calendar_event_created",
            extra={
                "component": _COMPONENT,
                "action": "create_event",
                "result": "ok",
                "correlation_id": get_correlation_id(),
            },
        )
        return event

    async def list_events_for_date(self, day: date) -> list[CalendarEvent]:
        start_dt = datetime.combine(day, time.min, tzinfo=self._zone)
        end_dt = start_dt + timedelta(days=1)
        response = await self._call(
            "list_events",
            self._list_events_sync,
            start_dt.isoformat(),
            end_dt.isoformat(),
        )
        return map_calendar_events(response, self._zone)

    async def cancel_event(self, event_id: str) -> bool:
        try:
            await self._call("cancel_event", self._delete_event_sync, event_id)
        except PersistenceError as exc:
            cause = exc.__cause__
            if isinstance(cause, HttpError) and http_status(cause) in {404, 410}:
                logger.info(
                    "google_calendar_event_missing",
                    extra={
                        "component": _COMPONENT,
                        "action": "cancel_event",
                        "result": "not_found",
                        "correlation_id": get_correlation_id(),
                    },
                )
                return False
            raise
        return True

    async def _call(self, action: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), self._timeout)
        except HttpError as exc:
            self._log_error(action=action, result="error", exc=exc)
            raise PersistenceError(f"calendar_{action}_failed", operation=action) from exc
        except TimeoutError as exc:
            self._log_error(action=action, result="timeout")
            raise PersistenceError(f"calendar_{action}_timeout", operation=action) from exc
        except Exception as exc:
            self._log_error(action=action, result="error", unexpected=True)
            raise PersistenceError(f"calendar_{action}_failed", operation=action) from exc

    def _insert_event_sync(self, body: dict[str, Any]) -> dict[str, Any]:
        return self._service.events().insert(calendarId=self._calendar_id, body=body).execute()

    def _list_events_sync(self, time_min: str, time_max: str) -> dict[str, Any]:
        return (
            self._service.events()
            .list(
                calendarId=self._calendar_id,
                timeMin=time_min,
                timeMax=time_max,
                timeZone=self._timezone,
                singleEvents=True,
                orderBy="startTime",
            )
            .execute()
        )

    def _delete_event_sync(self, event_id: str) -> None:
        self._service.events().delete(calendarId=self._calendar_id, eventId=event_id).execute()

    def _log_error(
        self,
        *,
        action: str,
        result: str,
        exc: HttpError | None = None,
        unexpected: bool = False,
    ) -> None:
        extra: dict[str, Any] = {
            "component": _COMPONENT,
            "action": action,
            "result": result,
            "correlation_id": get_correlation_id(),
        }
        if exc is not None:
            extra["status_code"] = http_status(exc)
            extra["error_type"] = type(exc).__name__
            logger.error("google_calendar_http_error", extra=extra)
            return
        if unexpected:
            logger.exception("google_calendar_unexpected_error", extra=extra)
            return
        logger.warning("google_calendar_timeout", extra=extra)
