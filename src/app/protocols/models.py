"""Modelos compartilhados pelos contratos outbound e de processamento."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class MediaKind(StrEnum):
    """Tipos de mídia aceitos pela Graph API para envio por link."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


@dataclass(frozen=True, slots=True)
class ReplyButton:
    """Botão de resposta rápida (máx. 3 por mensagem, título até 20 chars)."""

    id: str
    title: str


@dataclass(frozen=True, slots=True)
class LocationInfo:
    """Pin de localização."""

    latitude: float
    longitude: float
    name: str
    address: str


@dataclass(frozen=True, slots=True)
class ContactCard:
    """Cartão de contato (vCard simplificado da Graph API)."""

    formatted_name: str
    first_name: str
    phone: str
    wa_id: str
    email: str = ""
    organization: str = ""
    url: str = ""


@dataclass(slots=True)
class WebhookProcessingSummary:
    """Resumo de um processamento de webhook (apenas contagens)."""

    total_received: int = 0
    processed: int = 0
    skipped_duplicates: int = 0
    failed: int = 0
    skipped_reasons: list[str] = field(default_factory=list)

    def to_log_dict(self) -> dict[str, int]:
        return {
            "total_received": self.total_received,
            "processed": self.processed,
            "skipped_duplicates": self.skipped_duplicates,
            "failed": self.failed,
        }
