"""Stores: implementações em memória do estado efêmero.

Módulos disponíveis:
    - memory_stores: estado de conversa (TTL + lock por usuário) e dedupe
"""

from __future__ import annotations

from app.infra.stores.memory_stores import (
    MemoryConversationStore,
    MemoryDedupeStore,
)

__all__ = [
    "MemoryConversationStore",
    "MemoryDedupeStore",
]
