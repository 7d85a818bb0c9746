"""Prompts do assistente médico virtual.

O texto enviado ao modelo é sempre em espanhol: é o idioma dos pacientes.
"""

from __future__ import annotations

# Prefixo fixo que o fluxo do assistente envia em toda pergunta
ASSISTANT_INSTRUCTION_PREFIX = (
    "Eres un asistente médico virtual de una farmacia/clínica. "
    "Proporciona información útil y precisa sobre salud, medicamentos y "
    "servicios médicos. Responde en español y de manera amigable."
)

_PERSONA_TEMPLATE = """Eres un asistente médico virtual profesional y amigable de una clínica/farmacia llamada {clinic_name}.

INSTRUCCIONES:
- Responde en español de manera clara y profesional
- Proporciona información médica general y educativa
- Para consultas específicas, recomienda siempre consultar a un profesional
- Sé empático y comprensivo
- Mantén respuestas concisas pero informativas (máximo {max_words} palabras)
- No diagnósticos médicos específicos, solo información general
- Si no sabes algo, admítelo y recomienda consultar al médico

El usuario se llama: {user_name}"""

DEFAULT_CLINIC_NAME = "ZoroathaProject"
DEFAULT_MAX_WORDS = 300


def build_default_system_prompt(
    user_name: str,
    *,
    clinic_name: str = DEFAULT_CLINIC_NAME,
    max_words: int = DEFAULT_MAX_WORDS,
) -> str:
    """Prompt de persona usado quando o chamador não fornece um."""
    return _PERSONA_TEMPLATE.format(
        clinic_name=clinic_name,
        max_words=max_words,
        user_name=user_name or "Usuario",
    )


def build_assistant_system_prompt(user_name: str) -> str:
    """Prefixo fixo do fluxo seguido da persona com o nome do usuário."""
    return f"{ASSISTANT_INSTRUCTION_PREFIX}\n\n{build_default_system_prompt(user_name)}"
