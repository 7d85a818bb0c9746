"""Validação e parse do corpo do webhook (POST)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from api.connectors.whatsapp.signature import SignatureResult, verify_meta_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> tuple[dict[str, object], SignatureResult]:
    """Confere a assinatura e devolve o payload como dict.

    Raises:
        InvalidSignatureError: Assinatura ausente ou divergente.
        InvalidJsonError: Corpo não é JSON ou não é um objeto.
    """
    signature = verify_meta_signature(raw_body, headers, secret)
    if not signature.valid:
        raise InvalidSignatureError(signature.error or "invalid_signature")

    try:
        payload = json.loads(raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload, signature
