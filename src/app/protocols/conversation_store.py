"""Contrato do store de estado de conversa.

O store é de uso exclusivo do dispatcher. Implementações devem expirar
estados ociosos e oferecer exclusão mútua por usuário para serializar o
processamento de mensagens de um mesmo remetente.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from app.domain.conversation import ConversationState


class ConversationStoreProtocol(ABC):
    """Mapa user_id -> estado de conversa ativo."""

    @abstractmethod
    def get(self, user_id: str) -> ConversationState | None:
        """Retorna o estado ativo ou None (inexistente ou expirado)."""

    @abstractmethod
    def set(self, user_id: str, state: ConversationState) -> None:
        """Substitui integralmente o estado do usuário."""

    @abstractmethod
    def clear(self, user_id: str) -> bool:
        """Remove o estado. Retorna True se havia estado ativo."""

    @abstractmethod
    def locked(self, user_id: str) -> AbstractAsyncContextManager[None]:
        """Context manager async que segura o lock exclusivo do usuário."""
