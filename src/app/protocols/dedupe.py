"""Protocolo de dedupe de mensagens inbound."""

from __future__ import annotations

from abc import ABC, abstractmethod


class DedupeProtocol(ABC):
    """Contrato mínimo síncrono para stores de deduplicação.

    Método canônico:
    - seen(key: str, ttl: int) -> bool
      Retorna True se a chave já foi vista (duplicado). Se não vista, marca-a
      com TTL e retorna False.
    """

    @abstractmethod
    def seen(self, key: str, ttl: int) -> bool:
        """Verifica e marca a chave de forma atômica."""
