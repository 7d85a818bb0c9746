"""Webhook WhatsApp: verificação, assinatura e parsing."""

from api.connectors.whatsapp.signature import SignatureResult, verify_meta_signature
from api.connectors.whatsapp.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)
from api.connectors.whatsapp.webhook.verify import (
    WebhookChallengeError,
    verify_webhook_challenge,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "SignatureResult",
    "WebhookChallengeError",
    "WebhookRequestError",
    "parse_webhook_request",
    "verify_meta_signature",
    "verify_webhook_challenge",
]
