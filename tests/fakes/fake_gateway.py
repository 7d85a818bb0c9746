"""Gateway outbound fake que grava os envios em memória."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from utils.errors import GatewayError


@dataclass
class SentMessage:
    kind: str
    user_id: str
    text: str = ""
    buttons: tuple[Any, ...] = ()
    reply_to_message_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


class RecordingGateway:
    """Implementa OutboundGatewayProtocol sem IO.

    `fail_on` lista os tipos de envio que devem levantar GatewayError
    (ex.: {"location"}).
    """

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.sent: list[SentMessage] = []
        self.read_receipts: list[str] = []
        self.fail_on = set(fail_on or ())

    def _record(self, message: SentMessage) -> None:
        if message.kind in self.fail_on:
            raise GatewayError(f"fake_{message.kind}_failure", status_code=500)
        self.sent.append(message)

    async def send_text(
        self,
        user_id: str,
        text: str,
        reply_to_message_id: str | None = None,
    ) -> None:
        self._record(
            SentMessage("text", user_id, text=text, reply_to_message_id=reply_to_message_id)
        )

    async def send_buttons(
        self,
        user_id: str,
        text: str,
        buttons: Any,
        reply_to_message_id: str | None = None,
    ) -> None:
        self._record(
            SentMessage(
                "buttons",
                user_id,
                text=text,
                buttons=tuple(buttons),
                reply_to_message_id=reply_to_message_id,
            )
        )

    async def send_media(
        self,
        user_id: str,
        kind: Any,
        url: str,
        caption: str | None = None,
    ) -> None:
        self._record(
            SentMessage(
                "media",
                user_id,
                text=caption or "",
                extra={"kind": str(kind), "url": url},
            )
        )

    async def send_location(self, user_id: str, location: Any = None) -> None:
        self._record(SentMessage("location", user_id, extra={"location": location}))

    async def send_contact(self, user_id: str, contact: Any = None) -> None:
        self._record(SentMessage("contact", user_id, extra={"contact": contact}))

    async def mark_read(self, message_id: str) -> None:
        self.read_receipts.append(message_id)

    # Helpers de asserção

    def texts(self, user_id: str | None = None) -> list[str]:
        return [
            m.text
            for m in self.sent
            if m.kind == "text" and (user_id is None or m.user_id == user_id)
        ]

    def kinds(self) -> list[str]:
        return [m.kind for m in self.sent]

    def last(self) -> SentMessage:
        return self.sent[-1]

    def clear(self) -> None:
        self.sent.clear()
