"""Fluxo do assistente virtual: uma pergunta, uma resposta."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from ai.prompts import build_assistant_system_prompt
from ai.utils import format_answer
from app.constants import replies
from app.domain.conversation import AssistantDraft
from app.observability import get_correlation_id
from config.logging import log_fallback, user_ref
from utils.errors import KnowledgeError

if TYPE_CHECKING:
    from app.protocols.conversation_store import ConversationStoreProtocol
    from app.protocols.knowledge_service import KnowledgeServiceProtocol
    from app.protocols.outbound_gateway import OutboundGatewayProtocol
    from app.services.followup_scheduler import FollowUpScheduler
    from config.settings import ClinicSettings

logger = logging.getLogger(__name__)

_COMPONENT = "assistant_flow"

MIN_QUESTION_LENGTH = 2


class AssistantFlow:
    """Encaminha a pergunta ao serviço de conhecimento.

    O rascunho nunca sobrevive a uma tentativa de resposta: sucesso ou
    falha, o usuário volta ao estado sem fluxo.
    """

    def __init__(
        self,
        *,
        gateway: OutboundGatewayProtocol,
        knowledge: KnowledgeServiceProtocol,
        store: ConversationStoreProtocol,
        scheduler: FollowUpScheduler,
        clinic: ClinicSettings,
        timeout_seconds: float = 45.0,
        followup_delay_seconds: float = 1.0,
    ) -> None:
        self._gateway = gateway
        self._knowledge = knowledge
        self._store = store
        self._scheduler = scheduler
        self._clinic = clinic
        self._timeout = timeout_seconds
        self._followup_delay = followup_delay_seconds

    async def start(self, user_id: str) -> None:
        self._store.set(user_id, AssistantDraft())
        await self._gateway.send_text(user_id, replies.ASSISTANT_START)

    async def handle(
        self,
        user_id: str,
        text: str,
        *,
        user_name: str,
        message_id: str | None = None,
    ) -> None:
        """Responde a pergunta ou, se curta demais, pede outra."""
        question = text.strip()
        if len(question) < MIN_QUESTION_LENGTH:
            await self._gateway.send_text(user_id, replies.ASSISTANT_QUESTION_TOO_SHORT)
            return

        started = time.perf_counter()
        try:
            answer = await self._ask(question, user_name)
        except KnowledgeError as exc:
            self._store.clear(user_id)
            log_fallback(
                logger,
                _COMPONENT,
                reason=exc.reason,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            await self._gateway.send_text(
                user_id,
                replies.knowledge_fallback(self._clinic.emergency_phone),
            )
            await self._gateway.send_buttons(
                user_id, replies.MENU_PROMPT, replies.MAIN_MENU_BUTTONS
            )
            return

        self._store.clear(user_id)
        logger.info(
            "assistant_answer_delivered",
            extra={
                "component": _COMPONENT,
                "action": "answer",
                "result": "ok",
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
                "user_ref": user_ref(user_id),
                "correlation_id": get_correlation_id(),
            },
        )
        await self._gateway.send_text(
            user_id,
            format_answer(answer),
            reply_to_message_id=message_id,
        )
        self._scheduler.schedule(
            user_id,
            self._followup_delay,
            lambda: self._gateway.send_buttons(
                user_id, replies.FOLLOWUP_PROMPT, replies.FOLLOWUP_BUTTONS
            ),
        )

    async def _ask(self, question: str, user_name: str) -> str:
        try:
            return await asyncio.wait_for(
                self._knowledge.ask(
                    question,
                    user_name,
                    build_assistant_system_prompt(user_name),
                ),
                timeout=self._timeout,
            )
        except TimeoutError as exc:
            raise KnowledgeError("knowledge_timeout", reason="timeout") from exc
