"""Builder para mensagens de localização."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest


class LocationPayloadBuilder:
    """Builder para pin de localização."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        location = request.location
        if location is None:
            raise ValueError("location é obrigatório para mensagens de localização")
        return {
            "location": {
                "latitude": location.latitude,
                "longitude": location.longitude,
                "name": location.name,
                "address": location.address,
            }
        }
