"""Cliente HTTP especializado para a Graph API do WhatsApp.

Estende HttpClient com autenticação Bearer, interpretação do corpo
`error` da Meta e logs sem tokens nem números de telefone.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.whatsapp.meta_errors import parse_meta_error

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger: logging.Logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Envia payloads para o endpoint /messages da Graph API."""

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config, client)

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia um payload e retorna o JSON de resposta da Meta.

        Raises:
            ValueError: Se access_token estiver vazio.
            HttpError: Se erro HTTP, JSON inválido ou erro Meta.
        """
        if not access_token or not access_token.strip():
            raise ValueError(
                "access_token é obrigatório para envio de mensagens. "
                "Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)

        try:
            response_data = response.json()
        except ValueError as exc:
            logger.error(
                "whatsapp_invalid_response_json",
                extra={"status_code": response.status_code},
            )
            raise HttpError("invalid_response_json", status_code=response.status_code) from exc

        meta_error = parse_meta_error(response_data)
        if meta_error is not None:
            logger.warning(
                "whatsapp_meta_error",
                extra={
                    "status_code": response.status_code,
                    "error_type": meta_error.error_type,
                    "error_code": meta_error.error_code,
                    "is_permanent": meta_error.is_permanent,
                },
            )
            raise HttpError(
                f"Meta API error: {meta_error.error_type} ({meta_error.error_code})",
                status_code=meta_error.error_code,
                is_retryable=not meta_error.is_permanent,
            )

        if response.status_code >= 400:
            raise HttpError("http_error_status", status_code=response.status_code)

        logger.debug(
            "whatsapp_send_ok",
            extra={"status_code": response.status_code, "message_type": payload.get("type")},
        )
        return response_data


def create_whatsapp_http_client(
    settings: WhatsAppSettings,
    client: httpx.AsyncClient | None = None,
) -> WhatsAppHttpClient:
    """Factory do cliente WhatsApp a partir das settings."""
    config = HttpClientConfig(
        timeout_seconds=settings.request_timeout_seconds,
        max_retries=settings.max_retries,
    )
    return WhatsAppHttpClient(config=config, client=client)
