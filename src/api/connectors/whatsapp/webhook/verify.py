"""Desafio de verificação do webhook (GET) exigido pela Meta."""

from __future__ import annotations

import hmac


class WebhookChallengeError(ValueError):
    """Falha na verificação do desafio."""


def verify_webhook_challenge(
    hub_mode: str | None,
    hub_verify_token: str | None,
    hub_challenge: str | None,
    expected_token: str | None,
) -> str:
    """Retorna o hub.challenge quando modo e token conferem.

    Raises:
        WebhookChallengeError: Token não configurado, modo diferente de
            "subscribe" ou token divergente.
    """
    if not expected_token:
        raise WebhookChallengeError("missing_verify_token")

    if hub_mode != "subscribe" or not hub_verify_token:
        raise WebhookChallengeError("verification_failed")

    if not hmac.compare_digest(hub_verify_token.encode(), expected_token.encode()):
        raise WebhookChallengeError("verification_failed")

    return hub_challenge or ""
