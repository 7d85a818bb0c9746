"""Formatação determinística das respostas do modelo para o WhatsApp."""

from __future__ import annotations

import re
from typing import Final

# Limite de caracteres de um corpo de texto na Graph API
WHATSAPP_TEXT_LIMIT: Final[int] = 4096

ANSWER_PREFIX: Final[str] = "🤖 "

_EXCESS_BLANK_LINES: Final = re.compile(r"\n{3,}")


def format_answer(raw: str, *, limit: int = WHATSAPP_TEXT_LIMIT) -> str:
    """Normaliza a resposta e aplica o prefixo do assistente.

    Colapsa linhas em branco repetidas e trunca respeitando o limite
    do WhatsApp (incluindo o prefixo).

    Exemplos:
        >>> format_answer("  Hola\\n\\n\\n\\nMundo ")
        '🤖 Hola\\n\\nMundo'
    """
    text = _EXCESS_BLANK_LINES.sub("\n\n", raw.strip())
    budget = limit - len(ANSWER_PREFIX)
    if len(text) > budget:
        text = text[: budget - 1].rstrip() + "…"
    return f"{ANSWER_PREFIX}{text}"
