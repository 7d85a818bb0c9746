"""Builders para mensagens de mídia enviadas por link."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.constants.whatsapp import MessageType

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest

# Áudio não aceita legenda na Graph API
_CAPTION_SUPPORTED = frozenset({MessageType.IMAGE, MessageType.VIDEO, MessageType.DOCUMENT})


class MediaPayloadBuilder:
    """Builder genérico de mídia por link."""

    def __init__(self, media_type: MessageType) -> None:
        self._media_type = media_type

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        if not request.media_url:
            raise ValueError(f"media_url é obrigatório para {self._media_type}")
        media: dict[str, Any] = {"link": request.media_url}
        if request.media_caption and self._media_type in _CAPTION_SUPPORTED:
            media["caption"] = request.media_caption
        return {str(self._media_type): media}


class ImagePayloadBuilder(MediaPayloadBuilder):
    def __init__(self) -> None:
        super().__init__(MessageType.IMAGE)


class VideoPayloadBuilder(MediaPayloadBuilder):
    def __init__(self) -> None:
        super().__init__(MessageType.VIDEO)


class AudioPayloadBuilder(MediaPayloadBuilder):
    def __init__(self) -> None:
        super().__init__(MessageType.AUDIO)


class DocumentPayloadBuilder(MediaPayloadBuilder):
    def __init__(self) -> None:
        super().__init__(MessageType.DOCUMENT)
