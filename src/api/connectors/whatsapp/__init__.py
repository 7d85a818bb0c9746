"""Conector WhatsApp: único ponto de IO com a Graph API.

Responsabilidades:
- Webhook (verify, receive, signature)
- HTTP client para envio de mensagens
- Classificação dos erros da Meta
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import WhatsAppHttpClient, create_whatsapp_http_client
from .meta_errors import WhatsAppApiError, is_permanent_error, parse_meta_error
from .signature import SignatureResult, verify_meta_signature

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "SignatureResult",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "create_whatsapp_http_client",
    "is_permanent_error",
    "parse_meta_error",
    "verify_meta_signature",
]
