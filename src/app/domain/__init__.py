"""Modelos de dominio."""

from app.domain.appointment import SHEET_ERROR_MARKER, AppointmentDraft, CalendarEvent
from app.domain.conversation import AssistantDraft, AssistantStep, ConversationState
from app.domain.inbound import InboundEvent, InboundEventKind

__all__ = [
    "SHEET_ERROR_MARKER",
    "AppointmentDraft",
    "AssistantDraft",
    "AssistantStep",
    "CalendarEvent",
    "ConversationState",
    "InboundEvent",
    "InboundEventKind",
]
