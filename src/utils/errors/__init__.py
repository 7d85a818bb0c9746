"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    GatewayError,
    InfrastructureError,
    KnowledgeError,
    PersistenceError,
)

__all__ = [
    "GatewayError",
    "InfrastructureError",
    "KnowledgeError",
    "PersistenceError",
]
