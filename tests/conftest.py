"""Configuração do pytest para o projeto medpet_atende."""

import sys
from pathlib import Path

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


import pytest_asyncio  # noqa: E402

from tests.fakes.attendance import Attendance, build_attendance  # noqa: E402


@pytest_asyncio.fixture
async def make_attendance():
    """Factory de atendimento com fakes; cancela follow-ups no teardown."""
    created: list[Attendance] = []

    def factory(**kwargs) -> Attendance:
        attendance = build_attendance(**kwargs)
        created.append(attendance)
        return attendance

    yield factory

    for attendance in created:
        await attendance.scheduler.shutdown()
