"""Builder para mensagens de cartão de contato."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from api.connectors.whatsapp.models import OutboundMessageRequest


class ContactsPayloadBuilder:
    """Builder para envio de um único contato."""

    def build(self, request: OutboundMessageRequest) -> dict[str, Any]:
        contact = request.contact
        if contact is None:
            raise ValueError("contact é obrigatório para mensagens de contato")

        entry: dict[str, Any] = {
            "name": {
                "formatted_name": contact.formatted_name,
                "first_name": contact.first_name,
            },
            "phones": [{"phone": contact.phone, "wa_id": contact.wa_id, "type": "WORK"}],
        }
        if contact.email:
            entry["emails"] = [{"email": contact.email, "type": "WORK"}]
        if contact.organization:
            entry["org"] = {"company": contact.organization}
        if contact.url:
            entry["urls"] = [{"url": contact.url, "type": "WORK"}]
        return {"contacts": [entry]}
