"""Extrator de payloads WhatsApp Business API.

Responsabilidades:
- Extrair mensagens do payload bruto do webhook
- Converter texto e respostas de botão em InboundEvent
- Ignorar status, tipos não suportados e objetos de outros produtos

Não faz validação de negócio, apenas extração estrutural.
"""

from __future__ import annotations

import logging
from typing import Any

from app.domain.inbound import InboundEvent

from ._extraction_helpers import (
    extract_button_reply,
    extract_profile_names,
    extract_text_message,
)

logger = logging.getLogger(__name__)

WHATSAPP_OBJECT = "whatsapp_business_account"


def is_whatsapp_payload(payload: dict[str, Any]) -> bool:
    return isinstance(payload, dict) and payload.get("object") == WHATSAPP_OBJECT


def extract_inbound_events(payload: dict[str, Any]) -> list[InboundEvent]:
    """Extrai eventos de texto e de botão, na ordem do payload."""
    if not is_whatsapp_payload(payload):
        logger.info(
            "webhook_object_ignored",
            extra={"component": "whatsapp_extractor", "result": "ignored"},
        )
        return []

    events: list[InboundEvent] = []
    for entry in payload.get("entry") or []:
        if not isinstance(entry, dict):
            continue
        for change in entry.get("changes") or []:
            value = change.get("value") if isinstance(change, dict) else None
            if isinstance(value, dict):
                events.extend(_events_from_value(value))
    return events


def _events_from_value(value: dict[str, Any]) -> list[InboundEvent]:
    names = extract_profile_names(value)
    events: list[InboundEvent] = []
    for msg in value.get("messages") or []:
        if not isinstance(msg, dict):
            continue
        sender_id = msg.get("from")
        if not sender_id:
            continue
        event = _build_event(msg, str(sender_id), names.get(str(sender_id)) or names.get(""))
        if event is None:
            logger.info(
                "unsupported_message_type_received",
                extra={
                    "component": "whatsapp_extractor",
                    "message_type": msg.get("type") or "unknown",
                },
            )
            continue
        events.append(event)
    return events


def _build_event(
    msg: dict[str, Any],
    sender_id: str,
    profile_name: str | None,
) -> InboundEvent | None:
    message_type = msg.get("type")
    message_id = msg.get("id") or None
    if message_type == "text":
        text = extract_text_message(msg)
        if text is None:
            return None
        return InboundEvent.text_message(
            sender_id,
            text,
            message_id=message_id,
            profile_name=profile_name,
        )
    if message_type == "interactive":
        button_id = extract_button_reply(msg)
        if button_id is None:
            return None
        return InboundEvent.button_reply(
            sender_id,
            button_id,
            message_id=message_id,
            profile_name=profile_name,
        )
    return None
