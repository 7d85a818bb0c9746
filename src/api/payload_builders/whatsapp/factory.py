"""Factory para obter o builder correto por tipo de mensagem."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from api.payload_builders.whatsapp.base import (
    PayloadBuilder,
    build_base_payload,
)
from api.payload_builders.whatsapp.contacts import ContactsPayloadBuilder
from api.payload_builders.whatsapp.interactive import (
    InteractivePayloadBuilder,
)
from api.payload_builders.whatsapp.location import LocationPayloadBuilder
from api.payload_builders.whatsapp.media import (
    AudioPayloadBuilder,
    DocumentPayloadBuilder,
    ImagePayloadBuilder,
    VideoPayloadBuilder,
)
from api.payload_builders.whatsapp.text import (
    TextPayloadBuilder,
)
from app.constants.whatsapp import MessageType

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest

# Mapeamento de tipo de mensagem para builder
_BUILDERS: dict[MessageType, PayloadBuilder] = {
    MessageType.TEXT: TextPayloadBuilder(),
    MessageType.IMAGE: ImagePayloadBuilder(),
    MessageType.VIDEO: VideoPayloadBuilder(),
    MessageType.AUDIO: AudioPayloadBuilder(),
    MessageType.DOCUMENT: DocumentPayloadBuilder(),
    MessageType.LOCATION: LocationPayloadBuilder(),
    MessageType.CONTACTS: ContactsPayloadBuilder(),
    MessageType.INTERACTIVE: InteractivePayloadBuilder(),
}


def get_payload_builder(message_type: MessageType) -> PayloadBuilder | None:
    """Retorna o builder para o tipo de mensagem.

    Args:
        message_type: Tipo de mensagem

    Returns:
        Builder apropriado ou None se não suportado
    """
    return _BUILDERS.get(message_type)


def build_full_payload(request: OutboundMessageRequest) -> dict[str, Any]:
    """Constrói payload completo para a API Meta.

    Args:
        request: Requisição de envio

    Returns:
        Payload completo pronto para envio

    Raises:
        ValueError: Se tipo de mensagem não suportado ou dados inválidos
    """
    if not request.to:
        raise ValueError("to é obrigatório")

    builder = get_payload_builder(request.message_type)
    if builder is None:
        raise ValueError(f"Tipo de mensagem não suportado: {request.message_type}")

    payload = build_base_payload(request)
    payload.update(builder.build(request))
    return payload
