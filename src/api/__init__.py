"""API: camada de borda do canal WhatsApp.

Subpastas:
- connectors/: cliente HTTP da Graph API, assinatura e challenge do webhook
- normalizers/: payload do webhook -> InboundEvent
- payload_builders/: OutboundMessageRequest -> payload da Graph API
- routes/: endpoints HTTP (webhook, health)

Não contém regra de atendimento: fluxos e estado ficam em app/ e fsm/.
"""
