"""Testes do despacho inline/async do processamento do webhook."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import pytest

from api.routes.whatsapp import webhook_runtime_tasks
from api.routes.whatsapp.webhook_runtime import (
    dispatch_inbound_processing,
    drain_background_tasks,
    process_inbound_payload_safe,
)


class SlowUseCase:
    def __init__(self, delay_seconds: float = 0.0, error: Exception | None = None) -> None:
        self.payloads: list[dict[str, Any]] = []
        self._delay = delay_seconds
        self._error = error

    async def execute(self, payload: dict[str, Any]) -> None:
        await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        self.payloads.append(payload)


def _settings(mode: str) -> Any:
    return SimpleNamespace(webhook_processing_mode=mode)


@pytest.mark.asyncio
async def test_missing_use_case_is_ignored() -> None:
    await dispatch_inbound_processing(
        payload={"entry": []},
        correlation_id="cid",
        use_case=None,
        settings=_settings("inline"),
    )


@pytest.mark.asyncio
async def test_inline_processes_before_returning() -> None:
    use_case = SlowUseCase()

    await dispatch_inbound_processing(
        payload={"entry": []},
        correlation_id="cid",
        use_case=use_case,  # type: ignore[arg-type]
        settings=_settings("inline"),
    )

    assert use_case.payloads == [{"entry": []}]


@pytest.mark.asyncio
async def test_async_schedules_and_drain_waits() -> None:
    webhook_runtime_tasks.configure_processing_limit(2)
    use_case = SlowUseCase(delay_seconds=0.01)

    await dispatch_inbound_processing(
        payload={"entry": [1]},
        correlation_id="cid",
        use_case=use_case,  # type: ignore[arg-type]
        settings=_settings("async"),
    )
    assert use_case.payloads == []
    assert webhook_runtime_tasks.active_task_count() == 1

    await drain_background_tasks(timeout_seconds=1.0)

    assert use_case.payloads == [{"entry": [1]}]
    assert webhook_runtime_tasks.active_task_count() == 0


@pytest.mark.asyncio
async def test_drain_cancels_tasks_after_timeout() -> None:
    use_case = SlowUseCase(delay_seconds=5.0)

    await dispatch_inbound_processing(
        payload={"entry": []},
        correlation_id="cid",
        use_case=use_case,  # type: ignore[arg-type]
        settings=_settings("async"),
    )
    await drain_background_tasks(timeout_seconds=0.01)

    assert use_case.payloads == []
    assert webhook_runtime_tasks.active_task_count() == 0


@pytest.mark.asyncio
async def test_safe_processing_swallows_errors() -> None:
    use_case = SlowUseCase(error=RuntimeError("boom"))

    await process_inbound_payload_safe(
        payload={"entry": []},
        correlation_id="cid",
        use_case=use_case,  # type: ignore[arg-type]
    )
