"""Implementações concretas de IO para IA."""

from app.infra.ai.openrouter_client import OpenRouterKnowledgeClient

__all__ = [
    "OpenRouterKnowledgeClient",
]
