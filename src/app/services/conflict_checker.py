"""Verificação de conflito de horário contra eventos existentes."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from utils.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from app.domain.appointment import CalendarEvent
    from app.protocols.calendar_service import CalendarServiceProtocol

logger = logging.getLogger(__name__)

DEFAULT_CONFLICT_WINDOW = timedelta(minutes=30)


def find_conflict(
    candidate: datetime,
    events: Iterable[CalendarEvent],
    window: timedelta = DEFAULT_CONFLICT_WINDOW,
) -> CalendarEvent | None:
    """Primeiro evento cujo início fica a menos de `window` do candidato.

    A distância é absoluta: eventos antes e depois contam igual.
    """
    for event in events:
        if abs(event.start - candidate) < window:
            return event
    return None


def has_conflict(
    candidate: datetime,
    events: Iterable[CalendarEvent],
    window: timedelta = DEFAULT_CONFLICT_WINDOW,
) -> bool:
    return find_conflict(candidate, events, window) is not None


async def check_slot(
    calendar: CalendarServiceProtocol,
    candidate: datetime,
    window: timedelta = DEFAULT_CONFLICT_WINDOW,
) -> bool:
    """Consulta a agenda do dia e retorna True se o horário conflita.

    Falha ao listar eventos é registrada e tratada como agenda sem
    conflitos conhecidos.
    """
    try:
        events = await calendar.list_events_for_date(candidate.date())
    except PersistenceError as exc:
        logger.warning(
            "conflict_check_unavailable",
            extra={
                "component": "conflict_checker",
                "action": "list_events",
                "result": "failed",
                "error_type": type(exc).__name__,
                "correlation_id": get_correlation_id(),
            },
        )
        return False

    conflict = find_conflict(candidate, events, window)
    logger.info(
        "conflict_check_done",
        extra={
            "component": "conflict_checker",
            "action": "check_slot",
            "result": "conflict" if conflict else "free",
            "events_count": len(events),
            "correlation_id": get_correlation_id(),
        },
    )
    return conflict is not None
