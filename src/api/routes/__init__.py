"""Rotas HTTP da API: adapters de entrada.

Responsabilidades:
- Definir endpoints HTTP (webhook, health)
- Validação inicial de request (headers, query params)
- Delegação para connectors/use_cases
- Respostas HTTP apropriadas

Estrutura:
- routes/whatsapp/: webhook WhatsApp
- routes/health/: health checks e readiness
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]
