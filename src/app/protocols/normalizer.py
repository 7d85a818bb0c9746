"""Contrato do normalizador de payloads inbound."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from app.domain.inbound import InboundEvent


@runtime_checkable
class InboundNormalizerProtocol(Protocol):
    """Converte o payload bruto do webhook em eventos do dispatcher."""

    def normalize(self, payload: dict[str, Any]) -> list[InboundEvent]: ...
