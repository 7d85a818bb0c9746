"""Erros da Graph API (Meta/WhatsApp) e sua classificação."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Códigos HTTP/Meta em que repetir a chamada não resolve
_PERMANENT_CODES = frozenset({400, 401, 403, 404, 413})
_PERMANENT_TYPES = frozenset({"OAuthException", "InvalidRequest"})

# Códigos Meta de throttling (conta/app/número)
_THROTTLING_CODES = frozenset({4, 80007, 130429, 131048, 131056})


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado no corpo `error` da Graph API."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Retorna True quando o erro não deve ser retentado."""
    if error_code in _THROTTLING_CODES:
        return False
    return error_code in _PERMANENT_CODES or error_type in _PERMANENT_TYPES


def parse_meta_error(response_data: Any) -> WhatsAppApiError | None:
    """Extrai o erro do response JSON; None se não houver erro."""
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not isinstance(error_obj, dict):
        return None

    error_type = str(error_obj.get("type") or "unknown")
    raw_code = error_obj.get("code", 0)
    error_code = raw_code if isinstance(raw_code, int) else 0
    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=str(error_obj.get("message") or "unknown_error"),
        is_permanent=is_permanent_error(error_code, error_type),
    )
