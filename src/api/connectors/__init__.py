"""Connectors: adapters de borda para APIs externas.

- whatsapp/: WhatsApp Business (Graph API)
"""

__all__: list[str] = []
