"""Contrato da planilha de registro de citas."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence


@runtime_checkable
class SheetsServiceProtocol(Protocol):
    """Anexa linhas à planilha. Falhas levantam PersistenceError."""

    async def append_row(self, values: Sequence[str]) -> None: ...
