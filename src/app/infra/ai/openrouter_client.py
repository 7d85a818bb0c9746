"""Client do serviço de texto generativo via OpenRouter.

API compatível com OpenAI (chat completions). Implementação de IO:
toda falha é convertida em KnowledgeError com uma `reason` estável.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from ai.prompts.medical_assistant import build_default_system_prompt
from app.observability import get_correlation_id
from app.protocols.knowledge_service import KnowledgeServiceProtocol
from utils.errors import KnowledgeError

if TYPE_CHECKING:
    from config.settings.ai.openrouter import OpenRouterSettings

logger = logging.getLogger(__name__)

_COMPONENT = "openrouter_client"


def _reason_for_status(status_code: int) -> str:
    if status_code in (401, 403):
        return "auth"
    if status_code == 429:
        return "rate_limited"
    if status_code >= 500:
        return "unavailable"
    return "http_error"


def _extract_content(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        return None
    return content.strip()


class OpenRouterKnowledgeClient(KnowledgeServiceProtocol):
    """Implementa KnowledgeServiceProtocol sobre httpx.AsyncClient."""

    __slots__ = ("_http_client", "_settings")

    def __init__(
        self,
        settings: OpenRouterSettings,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._settings = settings
        self._http_client = http_client

    @property
    def is_available(self) -> bool:
        return self._settings.enabled and bool(self._settings.api_key)

    async def ask(self, question: str, user_name: str, system_prompt: str) -> str:
        if not self.is_available:
            raise KnowledgeError("knowledge_service_not_configured", reason="not_configured")

        payload = {
            "model": self._settings.model,
            "messages": [
                {
                    "role": "system",
                    "content": system_prompt or build_default_system_prompt(user_name),
                },
                {"role": "user", "content": question},
            ],
            "max_tokens": self._settings.max_tokens,
            "temperature": self._settings.temperature,
            "top_p": self._settings.top_p,
        }
        headers = {
            "Authorization": f"Bearer {self._settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self._settings.app_referer,
            "X-Title": self._settings.app_title,
        }

        started = time.perf_counter()
        try:
            response = await self._http_client.post(
                self._settings.chat_completions_url,
                headers=headers,
                json=payload,
                timeout=self._settings.timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            self._log_failure("timeout", started)
            raise KnowledgeError("knowledge_service_timeout", reason="timeout") from exc
        except httpx.HTTPStatusError as exc:
            reason = _reason_for_status(exc.response.status_code)
            self._log_failure(reason, started, status_code=exc.response.status_code)
            raise KnowledgeError(f"knowledge_service_{reason}", reason=reason) from exc
        except httpx.HTTPError as exc:
            self._log_failure("unavailable", started, error_type=type(exc).__name__)
            raise KnowledgeError("knowledge_service_unavailable", reason="unavailable") from exc
        except ValueError as exc:
            self._log_failure("empty_response", started, error_type="invalid_json")
            raise KnowledgeError("knowledge_service_invalid_json", reason="empty_response") from exc

        content = _extract_content(data)
        if content is None:
            self._log_failure("empty_response", started)
            raise KnowledgeError("knowledge_service_empty_response", reason="empty_response")

        usage = data.get("usage") if isinstance(data.get("usage"), dict) else {}
        logger.info(
            "knowledge_answer_generated",
            extra={
                "component": _COMPONENT,
                "action": "ask",
                "result": "ok",
                "model": self._settings.model,
                "tokens_used": usage.get("total_tokens"),
                "latency_ms": round((time.perf_counter() - started) * 1000, 1),
                "correlation_id": get_correlation_id(),
            },
        )
        return content

    def _log_failure(
        self,
        reason: str,
        started: float,
        *,
        status_code: int | None = None,
        error_type: str | None = None,
    ) -> None:
        extra: dict[str, Any] = {
            "component": _COMPONENT,
            "action": "ask",
            "result": "error",
            "reason": reason,
            "latency_ms": round((time.perf_counter() - started) * 1000, 1),
            "correlation_id": get_correlation_id(),
        }
        if status_code is not None:
            extra["status_code"] = status_code
        if error_type is not None:
            extra["error_type"] = error_type
        logger.warning("knowledge_call_failed", extra=extra)
