"""Stores em memória do estado de conversa e do dedupe.

Estado efêmero por processo: nada sobrevive a um reinício.
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from app.protocols.conversation_store import ConversationStoreProtocol
from app.protocols.dedupe import DedupeProtocol

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from app.domain.conversation import ConversationState


class _UserLock:
    """Lock de um usuário com contagem de interessados."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class MemoryConversationStore(ConversationStoreProtocol):
    """Estado de conversa por usuário com expiração por inatividade.

    O lock de cada usuário existe apenas enquanto houver alguém
    segurando ou aguardando; é descartado quando o último sai.
    """

    def __init__(
        self,
        idle_timeout_seconds: float = 1800,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._idle_timeout = idle_timeout_seconds
        self._clock = clock
        self._states: dict[str, tuple[ConversationState, float]] = {}
        self._locks: dict[str, _UserLock] = {}

    def _cleanup_expired(self) -> None:
        """Remove estados ociosos."""
        now = self._clock()
        expired = [k for k, (_, expires_at) in self._states.items() if expires_at <= now]
        for k in expired:
            del self._states[k]

    def get(self, user_id: str) -> ConversationState | None:
        self._cleanup_expired()
        entry = self._states.get(user_id)
        if entry is None:
            return None
        return entry[0]

    def set(self, user_id: str, state: ConversationState) -> None:
        self._cleanup_expired()
        self._states[user_id] = (state, self._clock() + self._idle_timeout)

    def clear(self, user_id: str) -> bool:
        self._cleanup_expired()
        return self._states.pop(user_id, None) is not None

    @asynccontextmanager
    async def locked(self, user_id: str) -> AsyncIterator[None]:
        entry = self._locks.get(user_id)
        if entry is None:
            entry = self._locks[user_id] = _UserLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                self._locks.pop(user_id, None)

    def active_users(self) -> int:
        """Quantidade de usuários com fluxo ativo (apenas contagem)."""
        self._cleanup_expired()
        return len(self._states)

    def pending_locks(self) -> int:
        """Quantidade de locks vivos (usuários com processamento em curso)."""
        return len(self._locks)


class MemoryDedupeStore(DedupeProtocol):
    """Store de dedupe em memória por message_id."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._store: dict[str, float] = {}  # key -> expires_at

    def _cleanup_expired(self) -> None:
        """Remove entradas expiradas."""
        now = self._clock()
        expired = [k for k, v in self._store.items() if v <= now]
        for k in expired:
            del self._store[k]

    def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca chave atomicamente."""
        self._cleanup_expired()
        if key in self._store:
            return True
        self._store[key] = self._clock() + ttl
        return False
