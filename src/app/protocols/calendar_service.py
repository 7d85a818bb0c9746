"""Contrato de calendario usado pelo fluxo de agendamento.

Mantemos apenas o protocolo aqui para permitir troca de provider sem
impactar o dispatcher.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date

    from app.domain.appointment import AppointmentDraft, CalendarEvent


@runtime_checkable
class CalendarServiceProtocol(Protocol):
    """Operacoes de eventos de calendario. Falhas levantam PersistenceError."""

    async def create_event(self, draft: AppointmentDraft) -> CalendarEvent:
        """Cria o evento da cita e retorna id e link."""
        ...

    async def list_events_for_date(self, day: date) -> list[CalendarEvent]:
        """Lista os eventos do dia (fuso da clinica) ordenados por inicio."""
        ...

    async def cancel_event(self, event_id: str) -> bool:
        """Cancela um evento existente e retorna sucesso da operacao."""
        ...
