"""Use case de processamento inbound WhatsApp.

Normaliza o payload do webhook, descarta reentregas da Meta (mesmo
message_id) e entrega cada evento ao dispatcher, em ordem.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.observability import get_correlation_id
from app.protocols.models import WebhookProcessingSummary

if TYPE_CHECKING:
    from app.protocols.dedupe import DedupeProtocol
    from app.protocols.normalizer import InboundNormalizerProtocol
    from app.services.message_handler import MessageHandler

logger = logging.getLogger(__name__)

_DEDUPE_PREFIX = "whatsapp:msg:"


class ProcessInboundUseCase:
    """Processa um payload de webhook já validado."""

    def __init__(
        self,
        *,
        normalizer: InboundNormalizerProtocol,
        dedupe: DedupeProtocol,
        handler: MessageHandler,
        dedupe_ttl_seconds: int = 3600,
    ) -> None:
        self._normalizer = normalizer
        self._dedupe = dedupe
        self._handler = handler
        self._dedupe_ttl = dedupe_ttl_seconds

    async def execute(self, payload: dict[str, Any]) -> WebhookProcessingSummary:
        events = self._normalizer.normalize(payload)
        summary = WebhookProcessingSummary(total_received=len(events))

        for event in events:
            if event.message_id and self._dedupe.seen(
                f"{_DEDUPE_PREFIX}{event.message_id}", self._dedupe_ttl
            ):
                summary.skipped_duplicates += 1
                summary.skipped_reasons.append("duplicate_message_id")
                continue
            try:
                await self._handler.handle(event)
            except Exception as exc:
                # O dispatcher já tem backstop; aqui só isola um evento dos demais.
                summary.failed += 1
                logger.error(
                    "inbound_event_failed",
                    extra={
                        "component": "process_inbound",
                        "action": "handle",
                        "result": "failed",
                        "error_type": type(exc).__name__,
                        "correlation_id": get_correlation_id(),
                    },
                    exc_info=True,
                )
                continue
            summary.processed += 1

        logger.info(
            "inbound_processed",
            extra={
                "component": "process_inbound",
                "action": "execute",
                "result": "ok" if summary.failed == 0 else "partial",
                **summary.to_log_dict(),
                "correlation_id": get_correlation_id(),
            },
        )
        return summary
