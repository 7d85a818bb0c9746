"""Modelo de requisição de envio para a Graph API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from app.constants.whatsapp import MessageType

if TYPE_CHECKING:
    from app.protocols.models import ContactCard, LocationInfo, ReplyButton


@dataclass(frozen=True, slots=True)
class OutboundMessageRequest:
    """Mensagem a enviar para um destinatário.

    Apenas os campos do tipo escolhido são lidos pelo builder
    correspondente; os demais ficam vazios.
    """

    to: str
    message_type: MessageType
    text: str | None = None
    reply_to_message_id: str | None = None
    buttons: tuple[ReplyButton, ...] = field(default_factory=tuple)
    media_url: str | None = None
    media_caption: str | None = None
    location: LocationInfo | None = None
    contact: ContactCard | None = None
