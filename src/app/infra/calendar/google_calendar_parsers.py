"""Helpers internos de parsing para respostas da Google Calendar API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.domain.appointment import CalendarEvent

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

    from googleapiclient.errors import HttpError


def map_calendar_event(payload: dict[str, Any], zone: ZoneInfo) -> CalendarEvent:
    end_value = payload.get("end")
    return CalendarEvent(
        event_id=str(payload.get("id") or ""),
        summary=str(payload.get("summary") or ""),
        html_link=payload.get("htmlLink") or None,
        start=_extract_event_datetime(payload.get("start"), zone),
        end=_extract_event_datetime(end_value, zone) if end_value else None,
        status=str(payload.get("status") or "confirmed"),
    )


def map_calendar_events(response: dict[str, Any], zone: ZoneInfo) -> list[CalendarEvent]:
    """Mapeia a resposta de events.list, ignorando itens sem inicio valido."""
    items = response.get("items") if isinstance(response, dict) else None
    events: list[CalendarEvent] = []
    for item in items or []:
        if not isinstance(item, dict) or item.get("status") == "cancelled":
            continue
        try:
            events.append(map_calendar_event(item, zone))
        except ValueError:
            continue
    return sorted(events, key=lambda event: event.start)


def parse_google_datetime(value: Any, zone: ZoneInfo) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=zone) if parsed.tzinfo is None else parsed.astimezone(zone)


def http_status(exc: HttpError) -> int | None:
    response = getattr(exc, "resp", None)
    return int(response.status) if response and getattr(response, "status", None) else None


def _extract_event_datetime(value: Any, zone: ZoneInfo) -> datetime:
    if isinstance(value, dict):
        if parsed := parse_google_datetime(value.get("dateTime"), zone):
            return parsed
        if isinstance(value.get("date"), str):
            return datetime.fromisoformat(value["date"]).replace(tzinfo=zone)
    # Evento sem horario nao pode ser mapeado como horario falso.
    raise ValueError("missing_event_datetime")
