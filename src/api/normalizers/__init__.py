"""Normalizers por canal: conversão de payloads externos para modelos internos.

Estrutura:
- whatsapp/: extractor do webhook da WhatsApp Business API
"""

from .whatsapp import extract_inbound_events

__all__ = [
    "extract_inbound_events",
]
