"""Normalizer WhatsApp: payload do webhook -> InboundEvent."""

from .extractor import WHATSAPP_OBJECT, extract_inbound_events, is_whatsapp_payload

__all__ = [
    "WHATSAPP_OBJECT",
    "extract_inbound_events",
    "is_whatsapp_payload",
]
