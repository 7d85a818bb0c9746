"""Agregador de settings de IA."""

from __future__ import annotations

from config.settings.ai.openrouter import (
    OPENROUTER_BASE_URL,
    OpenRouterSettings,
    get_openrouter_settings,
)

__all__ = [
    "OPENROUTER_BASE_URL",
    "OpenRouterSettings",
    "get_openrouter_settings",
]
