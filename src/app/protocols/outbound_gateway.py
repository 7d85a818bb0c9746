"""Contrato do gateway de envio de mensagens."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import ContactCard, LocationInfo, MediaKind, ReplyButton


@runtime_checkable
class OutboundGatewayProtocol(Protocol):
    """Capacidade de entrega de mensagens ao usuário.

    Todos os envios levantam GatewayError em falha, exceto mark_read,
    que é best-effort e nunca levanta.
    """

    async def send_text(
        self,
        user_id: str,
        text: str,
        reply_to_message_id: str | None = None,
    ) -> None: ...

    async def send_buttons(
        self,
        user_id: str,
        text: str,
        buttons: Sequence[ReplyButton],
        reply_to_message_id: str | None = None,
    ) -> None: ...

    async def send_media(
        self,
        user_id: str,
        kind: MediaKind,
        url: str,
        caption: str | None = None,
    ) -> None: ...

    async def send_location(
        self,
        user_id: str,
        location: LocationInfo | None = None,
    ) -> None: ...

    async def send_contact(
        self,
        user_id: str,
        contact: ContactCard | None = None,
    ) -> None: ...

    async def mark_read(self, message_id: str) -> None: ...
