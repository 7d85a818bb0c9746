"""Adapters concretos para WhatsApp (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpError
from api.connectors.whatsapp.models import OutboundMessageRequest
from api.normalizers.whatsapp import extract_inbound_events
from api.payload_builders.whatsapp.factory import build_full_payload
from api.payload_builders.whatsapp.status import build_read_receipt_payload
from app.constants.whatsapp import MessageType
from app.observability import get_correlation_id
from app.protocols.models import ContactCard, LocationInfo
from app.protocols.normalizer import InboundNormalizerProtocol
from app.protocols.outbound_gateway import OutboundGatewayProtocol
from config.logging import user_ref
from utils.errors import GatewayError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from api.connectors.whatsapp.http_client import WhatsAppHttpClient
    from app.domain.inbound import InboundEvent
    from app.protocols.models import MediaKind, ReplyButton
    from config.settings import ClinicSettings, WhatsAppSettings

logger = logging.getLogger(__name__)


class GraphApiNormalizer(InboundNormalizerProtocol):
    """Normalizador baseado no payload do webhook da Graph API."""

    def normalize(self, payload: dict[str, Any]) -> list[InboundEvent]:
        return extract_inbound_events(payload)


def clinic_location(clinic: ClinicSettings) -> LocationInfo:
    """Pin padrão da clínica."""
    return LocationInfo(
        latitude=clinic.latitude,
        longitude=clinic.longitude,
        name=clinic.name,
        address=clinic.address,
    )


def emergency_contact(clinic: ClinicSettings) -> ContactCard:
    """Cartão padrão de contato de emergência."""
    return ContactCard(
        formatted_name=clinic.emergency_contact_name,
        first_name=clinic.emergency_contact_name,
        phone=clinic.emergency_phone,
        wa_id=clinic.emergency_wa_id,
        email=clinic.email,
        organization=clinic.name,
        url=clinic.website,
    )


class GraphApiOutboundGateway(OutboundGatewayProtocol):
    """Gateway outbound sobre a Graph API /messages.

    Converte cada envio em OutboundMessageRequest, monta o payload com
    os builders e traduz qualquer falha em GatewayError.
    """

    def __init__(
        self,
        settings: WhatsAppSettings,
        clinic: ClinicSettings,
        http_client: WhatsAppHttpClient,
    ) -> None:
        self._settings = settings
        self._clinic = clinic
        self._http = http_client

    async def send_text(
        self,
        user_id: str,
        text: str,
        reply_to_message_id: str | None = None,
    ) -> None:
        await self._send(
            OutboundMessageRequest(
                to=user_id,
                message_type=MessageType.TEXT,
                text=text,
                reply_to_message_id=reply_to_message_id,
            )
        )

    async def send_buttons(
        self,
        user_id: str,
        text: str,
        buttons: Sequence[ReplyButton],
        reply_to_message_id: str | None = None,
    ) -> None:
        await self._send(
            OutboundMessageRequest(
                to=user_id,
                message_type=MessageType.INTERACTIVE,
                text=text,
                buttons=tuple(buttons),
                reply_to_message_id=reply_to_message_id,
            )
        )

    async def send_media(
        self,
        user_id: str,
        kind: MediaKind,
        url: str,
        caption: str | None = None,
    ) -> None:
        await self._send(
            OutboundMessageRequest(
                to=user_id,
                message_type=MessageType(str(kind)),
                media_url=url,
                media_caption=caption,
            )
        )

    async def send_location(
        self,
        user_id: str,
        location: LocationInfo | None = None,
    ) -> None:
        await self._send(
            OutboundMessageRequest(
                to=user_id,
                message_type=MessageType.LOCATION,
                location=location or clinic_location(self._clinic),
            )
        )

    async def send_contact(
        self,
        user_id: str,
        contact: ContactCard | None = None,
    ) -> None:
        await self._send(
            OutboundMessageRequest(
                to=user_id,
                message_type=MessageType.CONTACTS,
                contact=contact or emergency_contact(self._clinic),
            )
        )

    async def mark_read(self, message_id: str) -> None:
        """Confirmação de leitura best-effort: falhas só geram log."""
        try:
            await self._post(build_read_receipt_payload(message_id))
        except (HttpError, ValueError) as exc:
            logger.warning(
                "whatsapp_mark_read_failed",
                extra={
                    "component": "whatsapp_gateway",
                    "action": "mark_read",
                    "result": "failed",
                    "error_type": type(exc).__name__,
                    "correlation_id": get_correlation_id(),
                },
            )

    async def _send(self, request: OutboundMessageRequest) -> None:
        try:
            payload = build_full_payload(request)
            response = await self._post(payload)
        except HttpError as exc:
            self._log_error(request, type(exc).__name__, exc.status_code)
            raise GatewayError(
                f"Falha ao enviar mensagem {request.message_type}",
                status_code=exc.status_code,
                error_code="whatsapp_api_error",
            ) from exc
        except ValueError as exc:
            self._log_error(request, type(exc).__name__, None)
            raise GatewayError(
                f"Mensagem {request.message_type} inválida",
                error_code="invalid_payload",
            ) from exc

        messages = response.get("messages") or [{}]
        logger.info(
            "message_sent_to_whatsapp_api",
            extra={
                "component": "whatsapp_gateway",
                "action": "send",
                "result": "ok",
                "message_type": str(request.message_type),
                "message_id": messages[0].get("id", "unknown"),
                "user_ref": user_ref(request.to),
                "correlation_id": get_correlation_id(),
            },
        )

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._http.send_message(
            endpoint=self._settings.get_messages_endpoint(),
            access_token=self._settings.access_token,
            payload=payload,
        )

    def _log_error(
        self,
        request: OutboundMessageRequest,
        error_type: str,
        status_code: int | None,
    ) -> None:
        logger.error(
            "whatsapp_send_failed",
            extra={
                "component": "whatsapp_gateway",
                "action": "send",
                "result": "failed",
                "message_type": str(request.message_type),
                "error_type": error_type,
                "status_code": status_code,
                "user_ref": user_ref(request.to),
                "correlation_id": get_correlation_id(),
            },
        )
