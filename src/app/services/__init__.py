"""Serviços de aplicação.

Unidades de orquestração do atendimento (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.appointment_flow import AppointmentFlow
from app.services.assistant_flow import AssistantFlow
from app.services.conflict_checker import check_slot, find_conflict, has_conflict
from app.services.followup_scheduler import FollowUpScheduler
from app.services.message_handler import MessageHandler, is_greeting, normalize_command

__all__ = [
    "AppointmentFlow",
    "AssistantFlow",
    "FollowUpScheduler",
    "MessageHandler",
    "check_slot",
    "find_conflict",
    "has_conflict",
    "is_greeting",
    "normalize_command",
]
