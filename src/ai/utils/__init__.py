"""Utilitários determinísticos do módulo AI."""

from ai.utils.answer_formatter import ANSWER_PREFIX, WHATSAPP_TEXT_LIMIT, format_answer

__all__ = [
    "ANSWER_PREFIX",
    "WHATSAPP_TEXT_LIMIT",
    "format_answer",
]
