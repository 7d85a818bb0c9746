"""Testes do extrator de eventos do webhook WhatsApp."""

from __future__ import annotations

from typing import Any

from api.normalizers.whatsapp import extract_inbound_events, is_whatsapp_payload
from api.normalizers.whatsapp._extraction_helpers import (
    extract_button_reply,
    extract_profile_names,
    extract_text_message,
)
from app.domain.inbound import InboundEventKind


def _payload(messages: list[dict[str, Any]], contacts: list[dict[str, Any]] | None = None) -> dict:
    value: dict[str, Any] = {"messaging_product": "whatsapp", "messages": messages}
    if contacts is not None:
        value["contacts"] = contacts
    return {
        "object": "whatsapp_business_account",
        "entry": [{"id": "WABA", "changes": [{"field": "messages", "value": value}]}],
    }


TEXT_MESSAGE = {
    "from": "584141234567",
    "id": "wamid.A",
    "type": "text",
    "text": {"body": "Hola"},
}

BUTTON_MESSAGE = {
    "from": "584141234567",
    "id": "wamid.B",
    "type": "interactive",
    "interactive": {
        "type": "button_reply",
        "button_reply": {"id": "schedule", "title": "📅 Agendar Cita"},
    },
}


class TestExtractInboundEvents:
    def test_text_with_profile_name(self) -> None:
        contacts = [{"wa_id": "584141234567", "profile": {"name": "Ana"}}]

        events = extract_inbound_events(_payload([TEXT_MESSAGE], contacts))

        assert len(events) == 1
        event = events[0]
        assert event.kind is InboundEventKind.TEXT
        assert event.text == "Hola"
        assert event.message_id == "wamid.A"
        assert event.profile_name == "Ana"

    def test_button_reply(self) -> None:
        events = extract_inbound_events(_payload([BUTTON_MESSAGE]))

        assert events[0].kind is InboundEventKind.BUTTON_REPLY
        assert events[0].button_id == "schedule"
        assert events[0].profile_name is None

    def test_order_is_preserved(self) -> None:
        events = extract_inbound_events(_payload([BUTTON_MESSAGE, TEXT_MESSAGE]))

        assert [e.message_id for e in events] == ["wamid.B", "wamid.A"]

    def test_unsupported_types_are_skipped(self) -> None:
        image = {"from": "5511", "id": "wamid.C", "type": "image", "image": {"id": "m"}}
        list_reply = {
            "from": "5511",
            "id": "wamid.D",
            "type": "interactive",
            "interactive": {"type": "list_reply", "list_reply": {"id": "x"}},
        }

        assert extract_inbound_events(_payload([image, list_reply])) == []

    def test_status_only_payload(self) -> None:
        payload = {
            "object": "whatsapp_business_account",
            "entry": [{"changes": [{"value": {"statuses": [{"id": "wamid.A", "status": "read"}]}}]}],
        }

        assert extract_inbound_events(payload) == []

    def test_other_object_is_ignored(self) -> None:
        payload = _payload([TEXT_MESSAGE])
        payload["object"] = "page"

        assert not is_whatsapp_payload(payload)
        assert extract_inbound_events(payload) == []

    def test_message_without_sender_is_skipped(self) -> None:
        message = {**TEXT_MESSAGE, "from": ""}

        assert extract_inbound_events(_payload([message])) == []

    def test_malformed_structures_do_not_raise(self) -> None:
        payload = {"object": "whatsapp_business_account", "entry": ["x", {"changes": [None]}]}

        assert extract_inbound_events(payload) == []


class TestExtractionHelpers:
    def test_text_message_missing_body(self) -> None:
        assert extract_text_message({"text": {}}) is None

    def test_button_reply_requires_id(self) -> None:
        message = {"interactive": {"type": "button_reply", "button_reply": {"id": ""}}}

        assert extract_button_reply(message) is None

    def test_profile_name_without_wa_id(self) -> None:
        names = extract_profile_names({"contacts": [{"profile": {"name": " Luis "}}]})

        assert names == {"": "Luis"}
