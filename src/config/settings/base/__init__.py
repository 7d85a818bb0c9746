"""Agregador de settings base."""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.conversation import (
    ConversationSettings,
    get_conversation_settings,
)

__all__ = [
    "BaseSettings",
    "ConversationSettings",
    "Environment",
    "get_base_settings",
    "get_conversation_settings",
]
