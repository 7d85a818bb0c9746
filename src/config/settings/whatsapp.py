"""Settings específicas de WhatsApp.

Configurações do canal WhatsApp via Graph API. Aceita os nomes de
variáveis da implantação anterior (WEBHOOK_VERIFY_TOKEN, API_TOKEN,
BUSINESS_PHONE, API_VERSION) como fallback.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

# Constantes do Graph API
GRAPH_API_VERSION: str = "v22.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        verify_token: Token para verificação de webhook
        app_secret: Secret do app Meta para validação HMAC (opcional)
        access_token: Token de acesso à Graph API
        phone_number_id: ID do número de telefone no Meta Business
        api_version: Versão da Graph API
        api_base_url: URL base da Graph API
        request_timeout_seconds: Timeout para requisições HTTP
        max_retries: Máximo de tentativas em caso de erro transitório
        webhook_processing_mode: Modo de processamento do webhook (async|inline)
        webhook_max_in_flight: Limite de processamentos simultâneos em async
    """

    verify_token: str = ""
    app_secret: str = ""
    access_token: str = ""
    phone_number_id: str = ""

    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL

    request_timeout_seconds: float = 20.0
    max_retries: int = 2

    webhook_processing_mode: str = "async"
    webhook_max_in_flight: int = 100

    @property
    def api_endpoint(self) -> str:
        """URL base completa da API com versão."""
        return f"{self.api_base_url}/{self.api_version}"

    def get_messages_endpoint(self, phone_number_id: str | None = None) -> str:
        """Retorna URL para envio de mensagens.

        Raises:
            ValueError: Se phone_number_id não informado e não configurado.
        """
        pid = phone_number_id or self.phone_number_id
        if not pid:
            raise ValueError("phone_number_id é obrigatório")
        return f"{self.api_endpoint}/{pid}/messages"

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.verify_token:
            errors.append("WHATSAPP_VERIFY_TOKEN não configurado")

        if not self.phone_number_id:
            errors.append("WHATSAPP_PHONE_NUMBER_ID não configurado")

        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")

        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")

        if self.max_retries < 0:
            errors.append("WHATSAPP_MAX_RETRIES deve ser >= 0")

        if self.webhook_processing_mode not in ("async", "inline"):
            errors.append(
                "WHATSAPP_WEBHOOK_PROCESSING_MODE deve ser 'async' ou 'inline'"
            )

        if self.webhook_max_in_flight < 1:
            errors.append("WHATSAPP_WEBHOOK_MAX_IN_FLIGHT deve ser >= 1")

        return errors


def _env_with_fallback(key: str, legacy_key: str, default: str = "") -> str:
    """Lê uma variável com fallback para o nome legado."""
    return os.getenv(key) or os.getenv(legacy_key) or default


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        verify_token=_env_with_fallback("WHATSAPP_VERIFY_TOKEN", "WEBHOOK_VERIFY_TOKEN"),
        app_secret=os.getenv("WHATSAPP_APP_SECRET", ""),
        access_token=_env_with_fallback("WHATSAPP_ACCESS_TOKEN", "API_TOKEN"),
        phone_number_id=_env_with_fallback("WHATSAPP_PHONE_NUMBER_ID", "BUSINESS_PHONE"),
        api_version=_env_with_fallback(
            "WHATSAPP_API_VERSION", "API_VERSION", GRAPH_API_VERSION
        ),
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(
            os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "20")
        ),
        max_retries=int(os.getenv("WHATSAPP_MAX_RETRIES", "2")),
        webhook_processing_mode=os.getenv(
            "WHATSAPP_WEBHOOK_PROCESSING_MODE", "async"
        ).lower(),
        webhook_max_in_flight=int(os.getenv("WHATSAPP_WEBHOOK_MAX_IN_FLIGHT", "100")),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings."""
    return _load_from_env()
