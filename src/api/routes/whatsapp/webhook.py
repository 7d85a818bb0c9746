"""Endpoints de webhook do WhatsApp.

Endpoints:
- GET /webhook: verificação de webhook (Meta challenge)
- POST /webhook: recebimento de eventos inbound

Fluxo:
1. GET: Meta envia challenge, respondemos com hub.challenge
2. POST: validamos assinatura, respondemos 200 e processamos em seguida

Segurança:
- Validação HMAC em POST quando WHATSAPP_APP_SECRET está configurado
- Resposta rápida (200 OK) para evitar retry da Meta
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.whatsapp.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)
from api.connectors.whatsapp.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)
from api.routes.whatsapp.webhook_runtime import dispatch_inbound_processing
from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.settings import get_whatsapp_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["whatsapp"])


def _get_inbound_use_case(request: Request) -> Any:
    container = getattr(request.app.state, "container", None)
    return getattr(container, "process_inbound", None)


@router.get("")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook: responde ao challenge da Meta.

    Query params esperados:
    - hub.mode: deve ser "subscribe"
    - hub.verify_token: deve corresponder ao configurado
    - hub.challenge: valor a retornar

    Returns:
        Texto do challenge ou erro 403.
    """
    settings = get_whatsapp_settings()

    hub_mode = request.query_params.get("hub.mode")
    hub_verify_token = request.query_params.get("hub.verify_token")
    hub_challenge = request.query_params.get("hub.challenge")

    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=hub_verify_token,
            hub_challenge=hub_challenge,
            expected_token=settings.verify_token,
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "whatsapp", "error": str(exc)},
        )
        return Response(
            content="Forbidden",
            media_type="text/plain",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    logger.info(
        "webhook_verified",
        extra={"channel": "whatsapp", "hub_mode": hub_mode},
    )
    # Meta espera o challenge como texto puro
    return Response(
        content=challenge,
        media_type="text/plain",
        status_code=status.HTTP_200_OK,
    )


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de eventos inbound do WhatsApp.

    Validações:
    1. Assinatura HMAC (X-Hub-Signature-256)
    2. JSON válido

    Returns:
        Confirmação de recebimento ou Response de erro.
    """
    token = set_correlation_id(request.headers.get("x-correlation-id"))

    try:
        settings = get_whatsapp_settings()
        raw_body = await request.body()

        try:
            payload, signature_result = parse_webhook_request(
                raw_body=raw_body,
                headers=dict(request.headers),
                secret=settings.app_secret or None,
            )
        except InvalidSignatureError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "whatsapp",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Unauthorized",
                media_type="text/plain",
                status_code=status.HTTP_401_UNAUTHORIZED,
            )
        except InvalidJsonError as exc:
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "whatsapp",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return Response(
                content="Bad Request",
                media_type="text/plain",
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        logger.info(
            "webhook_received",
            extra={
                "channel": "whatsapp",
                "correlation_id": get_correlation_id(),
                "signature_valid": signature_result.valid,
                "signature_skipped": signature_result.skipped,
                "payload_size": len(raw_body),
            },
        )

        await dispatch_inbound_processing(
            payload=payload,
            correlation_id=get_correlation_id(),
            use_case=_get_inbound_use_case(request),
            settings=settings,
        )
        return {
            "status": "received",
            "correlation_id": get_correlation_id(),
        }
    finally:
        reset_correlation_id(token)
