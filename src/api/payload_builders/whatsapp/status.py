"""Payload de confirmação de leitura."""

from __future__ import annotations

from typing import Any


def build_read_receipt_payload(message_id: str) -> dict[str, Any]:
    """Marca uma mensagem recebida como lida."""
    if not message_id:
        raise ValueError("message_id é obrigatório")
    return {
        "messaging_product": "whatsapp",
        "status": "read",
        "message_id": message_id,
    }
