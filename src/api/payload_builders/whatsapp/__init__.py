"""Builders de payload para API Meta/WhatsApp.

Um builder por tipo de mensagem; a factory monta o payload completo.
"""

from api.payload_builders.whatsapp.base import (
    PayloadBuilder,
    build_base_payload,
)
from api.payload_builders.whatsapp.factory import (
    build_full_payload,
    get_payload_builder,
)
from api.payload_builders.whatsapp.status import build_read_receipt_payload

__all__ = [
    "PayloadBuilder",
    "build_base_payload",
    "build_full_payload",
    "build_read_receipt_payload",
    "get_payload_builder",
]
