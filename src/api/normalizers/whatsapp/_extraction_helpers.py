"""Helpers de extração de campos por tipo de mensagem WhatsApp.

Separado de extractor.py para manter SRP.
"""

from __future__ import annotations

from typing import Any


def extract_text_message(msg: dict[str, Any]) -> str | None:
    """Extrai corpo de mensagem de texto."""
    text_block = msg.get("text")
    if isinstance(text_block, dict):
        body = text_block.get("body")
        return body if isinstance(body, str) else None
    return None


def extract_button_reply(msg: dict[str, Any]) -> str | None:
    """Extrai o id do botão de uma resposta interativa do tipo button_reply."""
    interactive_block = msg.get("interactive")
    if not isinstance(interactive_block, dict):
        return None
    if interactive_block.get("type") != "button_reply":
        return None
    reply = interactive_block.get("button_reply")
    if not isinstance(reply, dict):
        return None
    button_id = reply.get("id")
    return button_id if isinstance(button_id, str) and button_id else None


def extract_profile_names(value: dict[str, Any]) -> dict[str, str]:
    """Mapeia wa_id -> nome de perfil a partir de `contacts[]`.

    Quando o contato não traz wa_id, o nome fica sob a chave vazia e vale
    para qualquer remetente da mesma change.
    """
    names: dict[str, str] = {}
    for contact in value.get("contacts") or []:
        if not isinstance(contact, dict):
            continue
        profile = contact.get("profile") or {}
        name = profile.get("name") if isinstance(profile, dict) else None
        if isinstance(name, str) and name.strip():
            names[str(contact.get("wa_id") or "")] = name.strip()
    return names
