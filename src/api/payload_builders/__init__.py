"""Payload builders por canal: construção de payloads para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Business API (Graph API /messages)
"""

__all__: list[str] = []
