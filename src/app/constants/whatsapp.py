"""Enums e limites da API Meta/WhatsApp usados pelo serviço."""

from __future__ import annotations

from enum import StrEnum

# Limites da Graph API para mensagens interativas de botões
MAX_REPLY_BUTTONS = 3
MAX_BUTTON_TITLE_LENGTH = 20
MAX_INTERACTIVE_BODY_LENGTH = 1024
MAX_TEXT_BODY_LENGTH = 4096


class MessageType(StrEnum):
    """Tipos de conteúdo enviados pelo serviço."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"
    LOCATION = "location"
    CONTACTS = "contacts"
    INTERACTIVE = "interactive"


class InteractiveType(StrEnum):
    """Tipos de mensagem interativa recebidos/enviados."""

    BUTTON = "button"
    BUTTON_REPLY = "button_reply"


class ButtonId(StrEnum):
    """IDs dos botões do menu.

    SPEAK_TO_AGENT é o id legado do botão de localização; menus já
    entregues aos usuários ainda podem enviá-lo.
    """

    SCHEDULE = "schedule"
    SERVICES = "services"
    LOCATION = "location"
    SPEAK_TO_AGENT = "speak_to_agent"
    EMERGENCY = "emergency"
