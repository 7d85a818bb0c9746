"""Testes do fluxo de agendamento de cita."""

from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from app.constants import replies
from app.constants.whatsapp import ButtonId
from app.domain.appointment import SHEET_ERROR_MARKER, AppointmentDraft
from fsm.states.appointment import AppointmentStep
from tests.fakes.attendance import BOOKING_ANSWERS, USER
from tests.fakes.fake_calendar_service import CARACAS, FakeCalendarService
from tests.fakes.fake_gateway import RecordingGateway
from tests.fakes.fake_sheets_service import FakeSheetsService
from utils.errors import GatewayError

EXISTING_SLOT = datetime(2025, 6, 15, 10, 0, tzinfo=CARACAS)


class TestStepPrompts:
    @pytest.mark.asyncio
    async def test_each_valid_answer_asks_next_field(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        attendance.gateway.clear()

        await attendance.answer_all(BOOKING_ANSWERS[:4])

        assert attendance.gateway.texts() == [
            replies.ask_date("Ana Pérez"),
            replies.ask_time("15/06/2025"),
            replies.ask_consulta("10:00 AM"),
            replies.ask_monto("Consulta general"),
        ]
        state = attendance.store.get(USER)
        assert isinstance(state, AppointmentDraft)
        assert state.step is AppointmentStep.MONTO

    @pytest.mark.asyncio
    async def test_normalized_values_are_echoed(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:6])
        attendance.gateway.clear()

        await attendance.text("j-12345678-9")

        assert attendance.gateway.texts() == [replies.ask_pago("J-12345678-9")]

    @pytest.mark.asyncio
    async def test_invalid_date_keeps_step(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.text("Ana Pérez")
        attendance.gateway.clear()

        await attendance.text("01/01/2025")

        assert attendance.gateway.texts() == [replies.INVALID_DATE]
        assert attendance.store.get(USER).step is AppointmentStep.DATE

    @pytest.mark.asyncio
    async def test_invalid_amount(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:4])
        attendance.gateway.clear()

        await attendance.text("cincuenta")

        assert attendance.gateway.texts() == [replies.INVALID_MONTO]
        assert attendance.store.get(USER).step is AppointmentStep.MONTO

    @pytest.mark.asyncio
    async def test_oversized_amount_keeps_draft(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:4])
        attendance.gateway.clear()

        await attendance.text("123456789012345678901234567890")

        assert attendance.gateway.texts() == [replies.INVALID_MONTO]
        assert attendance.store.get(USER).step is AppointmentStep.MONTO

    @pytest.mark.asyncio
    async def test_invalid_rif(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:6])
        attendance.gateway.clear()

        await attendance.text("X-1234")

        assert attendance.gateway.texts() == [replies.INVALID_RIF]
        assert attendance.store.get(USER).step is AppointmentStep.RIF


class TestConflict:
    @pytest.mark.asyncio
    async def test_nearby_slot_is_rejected_with_alternatives(self, make_attendance) -> None:
        calendar = FakeCalendarService()
        calendar.add_event(EXISTING_SLOT)
        attendance = make_attendance(calendar=calendar)
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:2])
        attendance.gateway.clear()

        await attendance.text("10:15 AM")

        assert attendance.gateway.texts() == [
            replies.slot_unavailable("15/06/2025", attendance.clinic.alternative_slots)
        ]
        assert attendance.store.get(USER).step is AppointmentStep.TIME

    @pytest.mark.asyncio
    async def test_slot_outside_window_is_accepted(self, make_attendance) -> None:
        calendar = FakeCalendarService()
        calendar.add_event(EXISTING_SLOT)
        attendance = make_attendance(calendar=calendar)
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:2])
        await attendance.text("10:15 AM")
        attendance.gateway.clear()

        await attendance.text("10:45")

        assert attendance.gateway.texts() == [replies.ask_consulta("10:45")]
        assert attendance.store.get(USER).time == "10:45"

    @pytest.mark.asyncio
    async def test_calendar_list_failure_does_not_block(self, make_attendance) -> None:
        attendance = make_attendance(calendar=FakeCalendarService(fail_list=True))
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all(BOOKING_ANSWERS[:3])

        assert attendance.store.get(USER).step is AppointmentStep.CONSULTA


class TestCompletion:
    @pytest.mark.asyncio
    async def test_happy_path(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)

        await attendance.answer_all()

        assert attendance.store.get(USER) is None
        assert len(attendance.calendar.created) == 1
        confirmation, info = attendance.gateway.texts()[-2:]
        assert "CITA CONFIRMADA" in confirmation
        assert "https://calendar.google.com/fake/evt-1" in confirmation
        assert "J-12345678-9" in confirmation
        assert info == replies.appointment_info(attendance.clinic.emergency_phone)

        row = attendance.sheets.rows[0]
        assert row[0] == "Ana Pérez"
        assert row[3] == "10/06/2025, 09:00:00"
        assert row[5] == "50.00"
        assert row[-1] == "evt-1"

    @pytest.mark.asyncio
    async def test_menu_is_resent_after_completion(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SCHEDULE)
        await attendance.answer_all()

        await asyncio.sleep(0.05)

        assert attendance.gateway.last().buttons == replies.MAIN_MENU_BUTTONS

    @pytest.mark.asyncio
    async def test_calendar_failure_sends_degraded_confirmation(self, make_attendance) -> None:
        attendance = make_attendance(calendar=FakeCalendarService(fail_create=True))
        await attendance.button(ButtonId.SCHEDULE)

        await attendance.answer_all()

        assert attendance.store.get(USER) is None
        texts = attendance.gateway.texts()
        final_draft = AppointmentDraft(
            step=AppointmentStep.COMPLETED,
            name="Ana Pérez",
            date="15/06/2025",
            time="10:00 AM",
            consulta="Consulta general",
            monto="50.00",
            proveedor="Clínica San Rafael",
            rif="J-12345678-9",
            pago="Efectivo",
        )
        assert replies.degraded_confirmation(final_draft) in texts
        assert attendance.sheets.rows[0][-1] == SHEET_ERROR_MARKER

    @pytest.mark.asyncio
    async def test_without_calendar(self, make_attendance) -> None:
        attendance = make_attendance(with_calendar=False)
        await attendance.button(ButtonId.SCHEDULE)

        await attendance.answer_all()

        assert attendance.store.get(USER) is None
        assert any("Cita registrada" in text for text in attendance.gateway.texts())

    @pytest.mark.asyncio
    async def test_sheet_failure_still_confirms(self, make_attendance) -> None:
        attendance = make_attendance(sheets=FakeSheetsService(fail=True))
        await attendance.button(ButtonId.SCHEDULE)

        await attendance.answer_all()

        assert attendance.store.get(USER) is None
        assert any("CITA CONFIRMADA" in text for text in attendance.gateway.texts())

    @pytest.mark.asyncio
    async def test_without_sheets(self, make_attendance) -> None:
        attendance = make_attendance(with_sheets=False)
        await attendance.button(ButtonId.SCHEDULE)

        await attendance.answer_all()

        assert attendance.store.get(USER) is None
        assert len(attendance.calendar.created) == 1

    @pytest.mark.asyncio
    async def test_draft_cleared_even_if_confirmation_fails(self, make_attendance) -> None:
        attendance = make_attendance(gateway=RecordingGateway(fail_on={"text"}))
        draft = AppointmentDraft(
            step=AppointmentStep.COMPLETED,
            name="Ana Pérez",
            date="15/06/2025",
            time="10:00 AM",
            consulta="Consulta general",
            monto="50.00",
            proveedor="Clínica San Rafael",
            rif="J-12345678-9",
            pago="Efectivo",
        )
        attendance.store.set(USER, draft)

        with pytest.raises(GatewayError):
            await attendance.appointment_flow.complete(USER, draft)

        assert attendance.store.get(USER) is None
        assert len(attendance.calendar.created) == 1
