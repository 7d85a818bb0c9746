"""Prompts do módulo AI.

Arquivos:
- medical_assistant.py: persona e prefixo fixo do assistente virtual
"""

from ai.prompts.medical_assistant import (
    ASSISTANT_INSTRUCTION_PREFIX,
    build_assistant_system_prompt,
    build_default_system_prompt,
)

__all__ = [
    "ASSISTANT_INSTRUCTION_PREFIX",
    "build_assistant_system_prompt",
    "build_default_system_prompt",
]
