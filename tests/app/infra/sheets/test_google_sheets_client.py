"""Testes do client Google Sheets com service simulado."""

from __future__ import annotations

from typing import Any

import httplib2
import pytest
from googleapiclient.errors import HttpError

from app.infra.sheets.google_sheets_client import GoogleSheetsClient
from utils.errors import PersistenceError


class FakeSheetsApi:
    """Imita service.spreadsheets().values().append(...).execute()."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict[str, Any]] = []
        self._error = error

    def spreadsheets(self) -> FakeSheetsApi:
        return self

    def values(self) -> FakeSheetsApi:
        return self

    def append(self, **kwargs: Any) -> FakeSheetsApi:
        self.calls.append(kwargs)
        return self

    def execute(self) -> dict[str, Any]:
        if self._error is not None:
            raise self._error
        return {"updates": {"updatedRows": 1}}


class TestGoogleSheetsClient:
    @pytest.mark.asyncio
    async def test_append_row(self) -> None:
        api = FakeSheetsApi()
        client = GoogleSheetsClient(spreadsheet_id="sheet-1", service=api)

        await client.append_row(["Ana", "15/06/2025"])

        assert api.calls == [
            {
                "spreadsheetId": "sheet-1",
                "range": "'Hoja 1'!A1",
                "valueInputOption": "RAW",
                "insertDataOption": "INSERT_ROWS",
                "body": {"values": [["Ana", "15/06/2025"]]},
            }
        ]

    @pytest.mark.asyncio
    async def test_http_error(self) -> None:
        error = HttpError(httplib2.Response({"status": "403"}), b"{}")
        client = GoogleSheetsClient(spreadsheet_id="s", service=FakeSheetsApi(error))

        with pytest.raises(PersistenceError) as exc_info:
            await client.append_row(["x"])

        assert exc_info.value.operation == "append_row"

    @pytest.mark.asyncio
    async def test_unexpected_error(self) -> None:
        client = GoogleSheetsClient(
            spreadsheet_id="s", service=FakeSheetsApi(OSError("rede"))
        )

        with pytest.raises(PersistenceError):
            await client.append_row(["x"])
