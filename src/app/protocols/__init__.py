"""Protocolos e contratos do core da aplicação."""

from .calendar_service import CalendarServiceProtocol
from .conversation_store import ConversationStoreProtocol
from .dedupe import DedupeProtocol
from .knowledge_service import KnowledgeServiceProtocol
from .models import (
    ContactCard,
    LocationInfo,
    MediaKind,
    ReplyButton,
    WebhookProcessingSummary,
)
from .normalizer import InboundNormalizerProtocol
from .outbound_gateway import OutboundGatewayProtocol
from .sheets_service import SheetsServiceProtocol

__all__ = [
    "CalendarServiceProtocol",
    "ContactCard",
    "ConversationStoreProtocol",
    "DedupeProtocol",
    "InboundNormalizerProtocol",
    "KnowledgeServiceProtocol",
    "LocationInfo",
    "MediaKind",
    "OutboundGatewayProtocol",
    "ReplyButton",
    "SheetsServiceProtocol",
    "WebhookProcessingSummary",
]
