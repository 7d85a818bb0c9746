"""Settings de conversação.

Estado de conversa é efêmero e em memória; aqui ficam apenas os tempos
que governam expiração, dedupe e follow-ups.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class ConversationSettings:
    """Configurações do estado de conversa.

    Attributes:
        idle_timeout_seconds: Tempo de inatividade até descartar um rascunho
        followup_delay_seconds: Atraso do reenvio do menu após um fluxo
        dedupe_ttl_seconds: Janela de dedupe por message_id
        knowledge_timeout_seconds: Limite da chamada ao serviço de IA
            do ponto de vista do fluxo
    """

    idle_timeout_seconds: int = 1800  # 30 min
    followup_delay_seconds: float = 1.0
    dedupe_ttl_seconds: int = 3600
    knowledge_timeout_seconds: float = 45.0

    def validate(self) -> list[str]:
        """Valida configurações de conversa.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.idle_timeout_seconds <= 0:
            errors.append("CONVERSATION_IDLE_TIMEOUT_SECONDS deve ser > 0")

        if self.followup_delay_seconds < 0:
            errors.append("FOLLOWUP_DELAY_SECONDS deve ser >= 0")

        if self.dedupe_ttl_seconds <= 0:
            errors.append("DEDUPE_TTL_SECONDS deve ser > 0")

        if self.knowledge_timeout_seconds <= 0:
            errors.append("KNOWLEDGE_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_conversation_from_env() -> ConversationSettings:
    """Carrega ConversationSettings de variáveis de ambiente."""
    return ConversationSettings(
        idle_timeout_seconds=int(
            os.getenv("CONVERSATION_IDLE_TIMEOUT_SECONDS", "1800")
        ),
        followup_delay_seconds=float(os.getenv("FOLLOWUP_DELAY_SECONDS", "1.0")),
        dedupe_ttl_seconds=int(os.getenv("DEDUPE_TTL_SECONDS", "3600")),
        knowledge_timeout_seconds=float(
            os.getenv("KNOWLEDGE_TIMEOUT_SECONDS", "45")
        ),
    )


@lru_cache(maxsize=1)
def get_conversation_settings() -> ConversationSettings:
    """Retorna instância cacheada de ConversationSettings."""
    return _load_conversation_from_env()
