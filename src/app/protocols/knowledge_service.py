"""Contrato do serviço de texto generativo."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KnowledgeServiceProtocol(Protocol):
    """Responde perguntas livres do assistente virtual."""

    async def ask(self, question: str, user_name: str, system_prompt: str) -> str:
        """Retorna o texto da resposta.

        Raises:
            KnowledgeError: Qualquer falha (timeout, auth, rate limit,
                indisponibilidade ou resposta vazia).
        """
        ...
