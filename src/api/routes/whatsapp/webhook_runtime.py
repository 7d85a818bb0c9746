"""Runtime helpers para processamento do webhook WhatsApp."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.routes.whatsapp.webhook_runtime_tasks import (
    drain_processing_tasks,
    schedule_processing_task,
)

if TYPE_CHECKING:
    from app.use_cases.whatsapp import ProcessInboundUseCase
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


async def process_inbound_payload_safe(
    *,
    payload: dict[str, Any],
    correlation_id: str,
    use_case: ProcessInboundUseCase,
) -> None:
    """Executa o processamento inbound registrando qualquer falha.

    A resposta HTTP já foi enviada à Meta; uma exceção aqui não tem
    para onde subir além do log.
    """
    try:
        await use_case.execute(payload)
    except Exception:
        logger.exception(
            "webhook_processing_failed",
            extra={
                "channel": "whatsapp",
                "correlation_id": correlation_id,
            },
        )


async def dispatch_inbound_processing(
    *,
    payload: dict[str, Any],
    correlation_id: str,
    use_case: ProcessInboundUseCase | None,
    settings: WhatsAppSettings,
) -> None:
    """Despacha processamento inline ou async conforme configuração."""
    if use_case is None:
        logger.warning(
            "webhook_use_case_unavailable",
            extra={
                "channel": "whatsapp",
                "correlation_id": correlation_id,
                "reason": "container_not_initialized",
            },
        )
        return

    processing_mode = (settings.webhook_processing_mode or "async").lower()
    if processing_mode == "inline":
        await process_inbound_payload_safe(
            payload=payload,
            correlation_id=correlation_id,
            use_case=use_case,
        )
        logger.info(
            "webhook_processing_completed",
            extra={
                "channel": "whatsapp",
                "correlation_id": correlation_id,
                "mode": "inline",
            },
        )
        return

    schedule_processing_task(
        correlation_id=correlation_id,
        coroutine=process_inbound_payload_safe(
            payload=payload,
            correlation_id=correlation_id,
            use_case=use_case,
        ),
    )


async def drain_background_tasks(timeout_seconds: float = 30.0) -> None:
    """Aguarda tasks async pendentes durante shutdown do processo."""
    await drain_processing_tasks(timeout_seconds=timeout_seconds)
