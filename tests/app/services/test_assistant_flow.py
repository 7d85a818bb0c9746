"""Testes do fluxo do assistente virtual."""

from __future__ import annotations

import asyncio

import pytest

from ai.prompts import ASSISTANT_INSTRUCTION_PREFIX
from app.constants import replies
from app.constants.whatsapp import ButtonId
from app.domain.conversation import AssistantDraft
from tests.fakes.attendance import USER
from tests.fakes.fake_knowledge_service import FakeKnowledgeService
from utils.errors import KnowledgeError


class TestAssistantFlow:
    @pytest.mark.asyncio
    async def test_answer_is_prefixed_and_replies_to_question(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SERVICES)
        attendance.gateway.clear()

        message_id = await attendance.text("¿Para qué sirve el paracetamol?")

        sent = attendance.gateway.last()
        assert sent.text == "🤖 El paracetamol se usa para el dolor y la fiebre."
        assert sent.reply_to_message_id == message_id
        assert attendance.store.get(USER) is None

    @pytest.mark.asyncio
    async def test_prompt_carries_user_name(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SERVICES)

        await attendance.text("¿Qué vacunas necesito?")

        call = attendance.knowledge.calls[0]
        assert call["question"] == "¿Qué vacunas necesito?"
        assert call["user_name"] == "Ana"
        assert call["system_prompt"].startswith(ASSISTANT_INSTRUCTION_PREFIX)
        assert "Ana" in call["system_prompt"]

    @pytest.mark.asyncio
    async def test_followup_buttons_after_answer(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SERVICES)
        await attendance.text("¿Qué vacunas necesito?")

        await asyncio.sleep(0.05)

        last = attendance.gateway.last()
        assert last.text == replies.FOLLOWUP_PROMPT
        assert last.buttons == replies.FOLLOWUP_BUTTONS

    @pytest.mark.asyncio
    async def test_short_question_keeps_flow(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SERVICES)
        attendance.gateway.clear()

        await attendance.text("?")

        assert attendance.gateway.texts() == [replies.ASSISTANT_QUESTION_TOO_SHORT]
        assert isinstance(attendance.store.get(USER), AssistantDraft)
        assert attendance.knowledge.calls == []

    @pytest.mark.asyncio
    async def test_knowledge_error_sends_fallback_and_menu(self, make_attendance) -> None:
        knowledge = FakeKnowledgeService(
            error=KnowledgeError("rate limited", reason="rate_limited")
        )
        attendance = make_attendance(knowledge=knowledge)
        await attendance.button(ButtonId.SERVICES)
        attendance.gateway.clear()

        await attendance.text("¿Qué es la hipertensión?")

        assert attendance.store.get(USER) is None
        assert attendance.gateway.texts() == [
            replies.knowledge_fallback(attendance.clinic.emergency_phone)
        ]
        assert attendance.gateway.last().buttons == replies.MAIN_MENU_BUTTONS
        assert not attendance.scheduler.pending(USER)

    @pytest.mark.asyncio
    async def test_timeout_sends_fallback(self, make_attendance) -> None:
        attendance = make_attendance(
            knowledge=FakeKnowledgeService(delay_seconds=0.5),
            knowledge_timeout_seconds=0.05,
        )
        await attendance.button(ButtonId.SERVICES)
        attendance.gateway.clear()

        await attendance.text("¿Qué es la hipertensión?")

        assert attendance.store.get(USER) is None
        assert attendance.gateway.texts() == [
            replies.knowledge_fallback(attendance.clinic.emergency_phone)
        ]

    @pytest.mark.asyncio
    async def test_commands_still_win_inside_flow(self, make_attendance) -> None:
        attendance = make_attendance()
        await attendance.button(ButtonId.SERVICES)

        await attendance.text("citas hoy")

        assert attendance.knowledge.calls == []
        assert isinstance(attendance.store.get(USER), AssistantDraft)
