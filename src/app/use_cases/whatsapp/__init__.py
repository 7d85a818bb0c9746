"""Use cases específicos de WhatsApp."""

from .process_inbound import ProcessInboundUseCase

__all__ = [
    "ProcessInboundUseCase",
]
