"""Builder para mensagens de texto."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants.whatsapp import MAX_TEXT_BODY_LENGTH

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest


class TextPayloadBuilder:
    """Builder para mensagens de texto simples."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        """Constrói payload para mensagem de texto.

        Args:
            request: Requisição de envio

        Returns:
            Payload de texto conforme API Meta

        Raises:
            ValueError: Se o texto estiver vazio ou exceder o limite
        """
        body = request.text or ""
        if not body.strip():
            raise ValueError("text é obrigatório para mensagens de texto")
        if len(body) > MAX_TEXT_BODY_LENGTH:
            raise ValueError(f"text excede {MAX_TEXT_BODY_LENGTH} caracteres")
        return {
            "text": {
                "preview_url": False,
                "body": body,
            }
        }
