"""Entrypoint da aplicação medpet_atende.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import httpx
from fastapi import FastAPI

from api.routes import create_api_router
from api.routes.whatsapp.webhook_runtime import drain_background_tasks
from api.routes.whatsapp.webhook_runtime_tasks import configure_processing_limit
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import build_container
from config.logging import get_logger
from config.settings import get_base_settings, get_whatsapp_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)

SHUTDOWN_DRAIN_TIMEOUT_SECONDS = 30.0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Cria o httpx.AsyncClient compartilhado e o container

    Shutdown:
    - Aguarda processamentos pendentes do webhook
    - Cancela follow-ups agendados e fecha o cliente HTTP
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()
    configure_processing_limit(get_whatsapp_settings().webhook_max_in_flight)

    http_client = httpx.AsyncClient()
    app.state.http_client = http_client
    app.state.container = build_container(http_client)

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra={"service": service_name})
        await drain_background_tasks(timeout_seconds=SHUTDOWN_DRAIN_TIMEOUT_SECONDS)
        await app.state.container.scheduler.shutdown()
        await http_client.aclose()
        app.state.container = None


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="medpet_atende",
        description="Atendimento WhatsApp: agendamento de citas e assistente virtual",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    fastapi_app.state.container = None
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})
    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    logger.info("app_dev_server_starting", extra={"port": port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=port,
        reload=True,
    )


if __name__ == "__main__":
    main()
