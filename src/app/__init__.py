"""App: atendimento, casos de uso e integrações.

Subpastas:
- bootstrap/: composition root (settings, container, adapters WhatsApp)
- use_cases/: processamento de um payload de webhook
- services/: dispatcher, fluxos de cita e assistente, follow-ups
- domain/: rascunhos, eventos inbound e eventos de calendário
- infra/: OpenRouter, Google Calendar, Google Sheets e stores em memória
- protocols/: contratos consumidos pelos serviços
- observability/: correlation_id
- constants/: textos ao usuário e limites da Graph API

Padrão: app executa; api adapta; ai formata; fsm governa; utils apoia.
"""
