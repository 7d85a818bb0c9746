"""Módulo AI: prompts e formatação do assistente médico virtual.

Não faz IO: a chamada ao provedor fica em app/infra/ai.
"""

from ai.prompts import build_assistant_system_prompt, build_default_system_prompt
from ai.utils import format_answer

__all__ = [
    "build_assistant_system_prompt",
    "build_default_system_prompt",
    "format_answer",
]
