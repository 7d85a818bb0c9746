"""Builder para mensagens interativas com botões de resposta."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants.whatsapp import (
    MAX_BUTTON_TITLE_LENGTH,
    MAX_INTERACTIVE_BODY_LENGTH,
    MAX_REPLY_BUTTONS,
    InteractiveType,
)

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest


class InteractivePayloadBuilder:
    """Builder para mensagens interativas do tipo button."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        """Constrói payload com até 3 botões de resposta.

        Raises:
            ValueError: Se corpo vazio, sem botões, botões demais ou
                título acima de 20 caracteres
        """
        body = request.text or ""
        if not body.strip():
            raise ValueError("text é obrigatório para mensagens interativas")
        if len(body) > MAX_INTERACTIVE_BODY_LENGTH:
            raise ValueError(f"text excede {MAX_INTERACTIVE_BODY_LENGTH} caracteres")
        if not request.buttons:
            raise ValueError("buttons é obrigatório para mensagens interativas")
        if len(request.buttons) > MAX_REPLY_BUTTONS:
            raise ValueError(f"Máximo de {MAX_REPLY_BUTTONS} botões por mensagem")

        buttons: list[dict[str, Any]] = []
        for button in request.buttons:
            if len(button.title) > MAX_BUTTON_TITLE_LENGTH:
                raise ValueError(
                    f"Título de botão excede {MAX_BUTTON_TITLE_LENGTH} caracteres"
                )
            buttons.append({
                "type": "reply",
                "reply": {"id": str(button.id), "title": button.title},
            })

        return {
            "interactive": {
                "type": str(InteractiveType.BUTTON),
                "body": {"text": body},
                "action": {"buttons": buttons},
            }
        }
