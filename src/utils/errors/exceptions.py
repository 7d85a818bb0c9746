"""Exceções de infraestrutura dos adaptadores externos.

Falhas de validação e conflito de horário não são exceções: são
tratadas dentro do fluxo como negações de guard.
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class GatewayError(InfrastructureError):
    """Falha ao entregar mensagem pela Graph API do WhatsApp."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code


class KnowledgeError(InfrastructureError):
    """Falha do serviço de texto generativo.

    Attributes:
        reason: Categoria estável para logs e métricas (not_configured,
            timeout, rate_limited, auth, unavailable, empty_response,
            http_error).
    """

    def __init__(self, message: str, *, reason: str = "http_error") -> None:
        super().__init__(message)
        self.reason = reason


class PersistenceError(InfrastructureError):
    """Falha de Google Calendar ou Google Sheets.

    Attributes:
        operation: Operação que falhou (create_event, list_events,
            cancel_event, append_row).
    """

    def __init__(self, message: str, *, operation: str) -> None:
        super().__init__(message)
        self.operation = operation
