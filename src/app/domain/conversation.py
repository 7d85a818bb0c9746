"""Estado de conversa por usuario.

No maximo um fluxo ativo por usuario: um rascunho de cita, um rascunho
do assistente, ou nada.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.appointment import AppointmentDraft


class AssistantStep(StrEnum):
    """Unico passo do assistente: aguardando uma pergunta."""

    QUESTION = "question"


class AssistantDraft(BaseModel):
    """Rascunho do assistente; descartado apos uma resposta."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: Literal["assistant"] = "assistant"
    step: AssistantStep = Field(default=AssistantStep.QUESTION)


ConversationState = AppointmentDraft | AssistantDraft


__all__ = [
    "AssistantDraft",
    "AssistantStep",
    "ConversationState",
]
