"""Endpoints de status e health check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import (
    get_base_settings,
    get_calendar_settings,
    get_openrouter_settings,
    get_sheets_settings,
    get_whatsapp_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = SERVICE_VERSION


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "disabled", "failed"]
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {"status": self.status, "error": self.error}


@router.get("/")
async def service_info() -> dict[str, str]:
    """Identificação do serviço."""
    return {
        "service": get_base_settings().service_name,
        "status": "running",
        "version": SERVICE_VERSION,
    }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe baseada em configuração.

    Só WhatsApp é crítico: sem credenciais nada é entregue. Calendar,
    Sheets e OpenRouter ausentes apenas degradam o atendimento.
    """
    checks = {
        "whatsapp": _check_whatsapp(),
        "openrouter": _check_openrouter(),
        "calendar": _check_google(
            get_calendar_settings().calendar_enabled,
            get_calendar_settings().validate_config(),
        ),
        "sheets": _check_google(
            get_sheets_settings().sheets_enabled,
            get_sheets_settings().validate_config(),
        ),
    }
    container_ready = getattr(request.app.state, "container", None) is not None
    ready = checks["whatsapp"].status == "ok" and container_ready

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {name: check.as_dict() for name, check in checks.items()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if not ready:
        logger.warning(
            "readiness_check_failed",
            extra={
                "component": "health",
                "container_ready": container_ready,
                "whatsapp": checks["whatsapp"].status,
            },
        )
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_whatsapp() -> DependencyCheck:
    settings = get_whatsapp_settings()
    if not settings.access_token or not settings.phone_number_id:
        return DependencyCheck(status="failed", error="not_configured")
    return DependencyCheck(status="ok")


def _check_openrouter() -> DependencyCheck:
    settings = get_openrouter_settings()
    if not settings.enabled:
        return DependencyCheck(status="disabled")
    if not settings.api_key:
        return DependencyCheck(status="degraded", error="not_configured")
    return DependencyCheck(status="ok")


def _check_google(enabled: bool, errors: list[str]) -> DependencyCheck:
    if not enabled:
        return DependencyCheck(status="disabled")
    if errors:
        return DependencyCheck(status="degraded", error="not_configured")
    return DependencyCheck(status="ok")
