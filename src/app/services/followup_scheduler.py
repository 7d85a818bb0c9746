"""Ações adiadas por usuário (reenvio do menu após um fluxo).

No máximo uma ação pendente por usuário: agendar outra substitui a
anterior, e qualquer mudança de estado do usuário deve cancelá-la.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.observability import get_correlation_id

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class FollowUpScheduler:
    """Timers canceláveis indexados por user_id."""

    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task[None]] = {}

    def schedule(
        self,
        user_id: str,
        delay_seconds: float,
        action: Callable[[], Awaitable[None]],
    ) -> None:
        """Agenda `action` após `delay_seconds`, substituindo a pendente."""
        self.cancel(user_id)
        task = asyncio.create_task(self._run(user_id, delay_seconds, action))
        self._tasks[user_id] = task

    def cancel(self, user_id: str) -> bool:
        """Cancela a ação pendente do usuário. Retorna True se havia uma."""
        task = self._tasks.pop(user_id, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def pending(self, user_id: str) -> bool:
        task = self._tasks.get(user_id)
        return task is not None and not task.done()

    async def shutdown(self) -> None:
        """Cancela tudo e aguarda o término das tasks."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(
        self,
        user_id: str,
        delay_seconds: float,
        action: Callable[[], Awaitable[None]],
    ) -> None:
        await asyncio.sleep(delay_seconds)
        current = asyncio.current_task()
        if self._tasks.get(user_id) is current:
            del self._tasks[user_id]
        try:
            await action()
        except Exception as exc:
            logger.warning(
                "followup_action_failed",
                extra={
                    "component": "followup_scheduler",
                    "action": "run",
                    "result": "failed",
                    "error_type": type(exc).__name__,
                    "correlation_id": get_correlation_id(),
                },
            )
