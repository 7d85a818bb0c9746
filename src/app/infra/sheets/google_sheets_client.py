"""Client concreto de Google Sheets para a planilha de registro de citas."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.infra.calendar.google_calendar_parsers import http_status
from app.observability import get_correlation_id
from app.protocols.sheets_service import SheetsServiceProtocol
from config.settings.google import SHEETS_SCOPE
from utils.errors import PersistenceError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from config.settings.google import SheetsSettings

logger = logging.getLogger(__name__)

_COMPONENT = "google_sheets_client"


class GoogleSheetsClient(SheetsServiceProtocol):
    """Anexa linhas via spreadsheets.values.append (RAW, INSERT_ROWS)."""

    __slots__ = ("_range", "_service", "_spreadsheet_id", "_timeout")

    def __init__(
        self,
        *,
        spreadsheet_id: str,
        service: Any,
        append_range: str = "'Hoja 1'!A1",
        timeout_seconds: float = 20.0,
    ) -> None:
        self._spreadsheet_id = spreadsheet_id
        self._service = service
        self._range = append_range
        self._timeout = timeout_seconds

    @classmethod
    def from_settings(cls, settings: SheetsSettings) -> GoogleSheetsClient:
        credentials = service_account.Credentials.from_service_account_info(
            settings.credentials.to_service_account_info(),
            scopes=[SHEETS_SCOPE],
        )
        service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        return cls(
            spreadsheet_id=settings.spreadsheet_id,
            service=service,
            append_range=settings.append_range,
            timeout_seconds=settings.request_timeout_seconds,
        )

    async def append_row(self, values: Sequence[str]) -> None:
        body = {"values": [list(values)]}
        extra: dict[str, Any] = {
            "component": _COMPONENT,
            "action": "append_row",
            "correlation_id": get_correlation_id(),
        }
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._append_sync, body),
                self._timeout,
            )
        except HttpError as exc:
            logger.error(
                "google_sheets_http_error",
                extra={**extra, "result": "error", "status_code": http_status(exc)},
            )
            raise PersistenceError("sheets_append_failed", operation="append_row") from exc
        except TimeoutError as exc:
            logger.warning("google_sheets_timeout", extra={**extra, "result": "timeout"})
            raise PersistenceError("sheets_append_timeout", operation="append_row") from exc
        except Exception as exc:
            logger.exception(
                "google_sheets_unexpected_error", extra={**extra, "result": "error"}
            )
            raise PersistenceError("sheets_append_failed", operation="append_row") from exc

        logger.info("google_sheets_row_appended", extra={**extra, "result": "ok"})

    def _append_sync(self, body: dict[str, Any]) -> dict[str, Any]:
        return (
            self._service.spreadsheets()
            .values()
            .append(
                spreadsheetId=self._spreadsheet_id,
                range=self._range,
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body=body,
            )
            .execute()
        )
