"""Testes dos helpers de parsing da Calendar API."""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import httplib2
from googleapiclient.errors import HttpError

from app.infra.calendar.google_calendar_parsers import (
    http_status,
    map_calendar_events,
    parse_google_datetime,
)

ZONE = ZoneInfo("America/Caracas")


class TestParseGoogleDatetime:
    def test_utc_suffix_converted_to_zone(self) -> None:
        parsed = parse_google_datetime("2025-06-15T14:00:00Z", ZONE)

        assert parsed == datetime(2025, 6, 15, 10, 0, tzinfo=ZONE)
        assert parsed.utcoffset() == ZONE.utcoffset(parsed)

    def test_naive_value_assumes_zone(self) -> None:
        parsed = parse_google_datetime("2025-06-15T10:00:00", ZONE)

        assert parsed.tzinfo is ZONE

    def test_invalid_values(self) -> None:
        assert parse_google_datetime("", ZONE) is None
        assert parse_google_datetime(None, ZONE) is None
        assert parse_google_datetime("amanhã", ZONE) is None


class TestMapCalendarEvents:
    def test_all_day_event_uses_date(self) -> None:
        events = map_calendar_events({"items": [{"id": "x", "start": {"date": "2025-06-15"}}]}, ZONE)

        assert events[0].start == datetime(2025, 6, 15, tzinfo=ZONE)

    def test_event_without_start_is_skipped(self) -> None:
        assert map_calendar_events({"items": [{"id": "x", "start": {}}]}, ZONE) == []

    def test_missing_items(self) -> None:
        assert map_calendar_events({}, ZONE) == []


class TestHttpStatus:
    def test_reads_status_from_response(self) -> None:
        error = HttpError(httplib2.Response({"status": "404"}), b"{}")

        assert http_status(error) == 404
