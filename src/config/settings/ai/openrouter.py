"""Settings do provedor de IA (OpenRouter, API compatível com OpenAI)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"


@dataclass(frozen=True)
class OpenRouterSettings:
    """Configurações do OpenRouter.

    Attributes:
        api_key: Chave da API
        base_url: URL base (endpoint /chat/completions é anexado)
        model: Modelo usado nas respostas do assistente
        timeout_seconds: Timeout para chamadas à API
        max_tokens: Limite de tokens da resposta
        temperature: Temperatura de amostragem
        top_p: Nucleus sampling
        app_referer: Valor do header HTTP-Referer exigido pelo OpenRouter
        app_title: Valor do header X-Title
        enabled: Se a integração está habilitada
    """

    api_key: str = ""
    base_url: str = OPENROUTER_BASE_URL
    model: str = "deepseek/deepseek-chat"
    timeout_seconds: float = 30.0
    max_tokens: int = 500
    temperature: float = 0.7
    top_p: float = 0.9
    app_referer: str = "https://zoroathaproject.com"
    app_title: str = "ZoroathaProject Asistente"
    enabled: bool = True

    @property
    def chat_completions_url(self) -> str:
        """URL completa do endpoint de chat completions."""
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def validate(self) -> list[str]:
        """Valida configurações do provedor de IA.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.enabled and not self.api_key:
            errors.append(
                "OPENROUTER_API_KEY não configurado mas OPENROUTER_ENABLED=true"
            )

        if self.timeout_seconds <= 0:
            errors.append("OPENROUTER_TIMEOUT_SECONDS deve ser > 0")

        if self.max_tokens < 1:
            errors.append("OPENROUTER_MAX_TOKENS deve ser >= 1")

        if not 0 <= self.temperature <= 2:
            errors.append("OPENROUTER_TEMPERATURE deve estar entre 0 e 2")

        return errors


def _load_openrouter_from_env() -> OpenRouterSettings:
    """Carrega OpenRouterSettings de variáveis de ambiente."""
    return OpenRouterSettings(
        api_key=os.getenv("OPENROUTER_API_KEY", ""),
        base_url=os.getenv("OPENROUTER_BASE_URL", OPENROUTER_BASE_URL),
        model=os.getenv("OPENROUTER_MODEL", "deepseek/deepseek-chat"),
        timeout_seconds=float(os.getenv("OPENROUTER_TIMEOUT_SECONDS", "30")),
        max_tokens=int(os.getenv("OPENROUTER_MAX_TOKENS", "500")),
        temperature=float(os.getenv("OPENROUTER_TEMPERATURE", "0.7")),
        top_p=float(os.getenv("OPENROUTER_TOP_P", "0.9")),
        app_referer=os.getenv("OPENROUTER_APP_REFERER", "https://zoroathaproject.com"),
        app_title=os.getenv("OPENROUTER_APP_TITLE", "ZoroathaProject Asistente"),
        enabled=os.getenv("OPENROUTER_ENABLED", "true").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_openrouter_settings() -> OpenRouterSettings:
    """Retorna instância cacheada de OpenRouterSettings."""
    return _load_openrouter_from_env()
