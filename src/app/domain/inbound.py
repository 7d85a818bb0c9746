"""Eventos inbound ja normalizados a partir do webhook do WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class InboundEventKind(StrEnum):
    """Tipos de evento que o dispatcher sabe classificar."""

    TEXT = "text"
    BUTTON_REPLY = "button_reply"


@dataclass(frozen=True, slots=True)
class InboundEvent:
    """Evento de um remetente.

    Attributes:
        kind: TEXT ou BUTTON_REPLY
        sender_id: wa_id do remetente
        message_id: ID da mensagem (read receipt e contexto de resposta)
        text: Corpo da mensagem de texto
        button_id: ID do botao escolhido
        profile_name: Nome de exibicao do remetente, se informado
    """

    kind: InboundEventKind
    sender_id: str
    message_id: str | None = None
    text: str = ""
    button_id: str = ""
    profile_name: str | None = None

    def __post_init__(self) -> None:
        if not self.sender_id:
            raise ValueError("sender_id é obrigatório")
        if self.kind is InboundEventKind.BUTTON_REPLY and not self.button_id:
            raise ValueError("button_id é obrigatório para BUTTON_REPLY")

    @classmethod
    def text_message(
        cls,
        sender_id: str,
        text: str,
        *,
        message_id: str | None = None,
        profile_name: str | None = None,
    ) -> InboundEvent:
        return cls(
            kind=InboundEventKind.TEXT,
            sender_id=sender_id,
            message_id=message_id,
            text=text,
            profile_name=profile_name,
        )

    @classmethod
    def button_reply(
        cls,
        sender_id: str,
        button_id: str,
        *,
        message_id: str | None = None,
        profile_name: str | None = None,
    ) -> InboundEvent:
        return cls(
            kind=InboundEventKind.BUTTON_REPLY,
            sender_id=sender_id,
            message_id=message_id,
            button_id=button_id,
            profile_name=profile_name,
        )


__all__ = ["InboundEvent", "InboundEventKind"]
