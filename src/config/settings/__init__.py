"""Agregador de settings do serviço.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

from config.settings.ai import (
    OpenRouterSettings,
    get_openrouter_settings,
)
from config.settings.base import (
    BaseSettings,
    ConversationSettings,
    Environment,
    get_base_settings,
    get_conversation_settings,
)
from config.settings.clinic import ClinicSettings, get_clinic_settings
from config.settings.google import (
    CalendarSettings,
    GoogleCredentialsSettings,
    SheetsSettings,
    get_calendar_settings,
    get_sheets_settings,
)
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    "BaseSettings",
    "CalendarSettings",
    "ClinicSettings",
    "ConversationSettings",
    "Environment",
    "GoogleCredentialsSettings",
    "OpenRouterSettings",
    "SheetsSettings",
    "WhatsAppSettings",
    "get_base_settings",
    "get_calendar_settings",
    "get_clinic_settings",
    "get_conversation_settings",
    "get_openrouter_settings",
    "get_sheets_settings",
    "get_whatsapp_settings",
]
