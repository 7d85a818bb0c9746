"""Contrato e campos comuns dos builders de payload."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest


class PayloadBuilder(Protocol):
    """Builder de um tipo de mensagem: retorna só o bloco do tipo."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]: ...


def build_base_payload(request: OutboundMessageRequest) -> dict[str, Any]:
    """Campos comuns a toda mensagem enviada.

    Args:
        request: Requisição de envio

    Returns:
        Payload base com destinatário, tipo e contexto de resposta
    """
    payload: dict[str, Any] = {
        "messaging_product": "whatsapp",
        "recipient_type": "individual",
        "to": request.to,
        "type": str(request.message_type),
    }
    if request.reply_to_message_id:
        payload["context"] = {"message_id": request.reply_to_message_id}
    return payload
