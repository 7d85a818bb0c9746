"""Validação da assinatura X-Hub-Signature-256 dos webhooks da Meta."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_HEADER = "x-hub-signature-256"
_PREFIX = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da validação.

    Attributes:
        valid: Assinatura aceita (ou validação desabilitada)
        skipped: True quando não há secret configurado
        error: Motivo da rejeição
    """

    valid: bool
    skipped: bool = False
    error: str | None = None


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    value = headers.get(name)
    if value is not None:
        return value
    for key, candidate in headers.items():
        if key.lower() == name:
            return candidate
    return None


def verify_meta_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: str | None,
) -> SignatureResult:
    """Confere o HMAC-SHA256 do corpo bruto com o app secret.

    Sem secret configurado a validação é pulada (valid=True, skipped=True).
    """
    if not secret:
        return SignatureResult(valid=True, skipped=True)

    header_value = _get_header(headers, SIGNATURE_HEADER)
    if not header_value:
        return SignatureResult(valid=False, error="missing_signature")
    if not header_value.startswith(_PREFIX):
        return SignatureResult(valid=False, error="malformed_signature")

    expected = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    received = header_value[len(_PREFIX):].strip()
    if not hmac.compare_digest(expected, received):
        return SignatureResult(valid=False, error="signature_mismatch")
    return SignatureResult(valid=True)
