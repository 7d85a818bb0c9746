"""Fluxo ponta a ponta: payloads de webhook até a cita registrada."""

from __future__ import annotations

import asyncio
import itertools
from typing import Any

import pytest

from app.bootstrap.whatsapp_adapters import GraphApiNormalizer
from app.constants import replies
from app.constants.whatsapp import ButtonId
from app.infra.stores import MemoryDedupeStore
from app.use_cases.whatsapp import ProcessInboundUseCase
from tests.fakes.attendance import BOOKING_ANSWERS, USER

_ids = itertools.count(1)


def _webhook(message: dict[str, Any]) -> dict[str, Any]:
    message_id = f"wamid.E2E{next(_ids)}"
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "waba-1",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "contacts": [{"wa_id": USER, "profile": {"name": "Ana"}}],
                            "messages": [
                                {"from": USER, "id": message_id, "timestamp": "1718000000", **message}
                            ],
                        },
                    }
                ],
            }
        ],
    }


def _text(body: str) -> dict[str, Any]:
    return _webhook({"type": "text", "text": {"body": body}})


def _button(button_id: str, title: str) -> dict[str, Any]:
    return _webhook(
        {
            "type": "interactive",
            "interactive": {
                "type": "button_reply",
                "button_reply": {"id": button_id, "title": title},
            },
        }
    )


@pytest.mark.asyncio
async def test_greeting_booking_and_menu_followup(make_attendance) -> None:
    attendance = make_attendance()
    use_case = ProcessInboundUseCase(
        normalizer=GraphApiNormalizer(),
        dedupe=MemoryDedupeStore(),
        handler=attendance.handler,
    )
    gateway = attendance.gateway

    await use_case.execute(_text("Hola!"))
    assert gateway.texts()[0] == replies.welcome("Ana")
    assert gateway.last().buttons == replies.MAIN_MENU_BUTTONS

    await use_case.execute(_button(ButtonId.SCHEDULE, "📅 Agendar Cita"))
    assert gateway.texts()[-1] == replies.APPOINTMENT_START

    for answer in BOOKING_ANSWERS:
        summary = await use_case.execute(_text(answer))
        assert summary.processed == 1

    assert attendance.store.get(USER) is None
    assert attendance.calendar is not None
    assert attendance.sheets is not None
    assert len(attendance.calendar.created) == 1
    row = attendance.sheets.rows[0]
    assert row[:3] == ["Ana Pérez", "15/06/2025", "10:00 AM"]
    assert row[7] == "J-12345678-9"
    assert row[-1] == "evt-1"

    confirmation, info = gateway.texts()[-2:]
    assert "¡CITA CONFIRMADA Y AGENDADA!" in confirmation
    assert "https://calendar.google.com/fake/evt-1" in confirmation
    assert info == replies.appointment_info(attendance.clinic.emergency_phone)

    await asyncio.sleep(0.05)
    assert gateway.last().kind == "buttons"
    assert gateway.last().buttons == replies.MAIN_MENU_BUTTONS


@pytest.mark.asyncio
async def test_second_booking_at_same_slot_is_rejected(make_attendance) -> None:
    attendance = make_attendance()
    use_case = ProcessInboundUseCase(
        normalizer=GraphApiNormalizer(),
        dedupe=MemoryDedupeStore(),
        handler=attendance.handler,
    )

    await use_case.execute(_button(ButtonId.SCHEDULE, "📅 Agendar Cita"))
    for answer in BOOKING_ANSWERS:
        await use_case.execute(_text(answer))

    await use_case.execute(_button(ButtonId.SCHEDULE, "📅 Agendar Cita"))
    for answer in BOOKING_ANSWERS[:3]:
        await use_case.execute(_text(answer))

    assert attendance.gateway.texts()[-1] == replies.slot_unavailable(
        "15/06/2025", attendance.clinic.alternative_slots
    )
    draft = attendance.store.get(USER)
    assert draft is not None
    assert draft.time is None
