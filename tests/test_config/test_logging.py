"""Testes de config.logging: configuração, filter, formatter e helpers."""

from __future__ import annotations

import json
import logging

import pytest

from config.logging import (
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    log_fallback,
    user_ref,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "appointment_completed", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("app.services.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [("INFO", logging.INFO), ("debug", logging.DEBUG), ("Error", logging.ERROR)],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)

        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_single_handler_with_correlation_filter(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(correlation_id_getter=lambda: "cid-1")

        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)

    def test_noisy_loggers_are_raised_to_warning(self) -> None:
        configure_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING


class TestCorrelationIdFilter:
    def test_injects_correlation_id_and_service(self) -> None:
        record = _record()

        assert CorrelationIdFilter("medpet_atende", lambda: "cid-1").filter(record)
        assert record.correlation_id == "cid-1"
        assert record.service == "medpet_atende"

    def test_preserves_explicit_correlation_id(self) -> None:
        record = _record(correlation_id="from-extra")

        CorrelationIdFilter("medpet_atende", lambda: "cid-1").filter(record)

        assert record.correlation_id == "from-extra"

    def test_without_getter_uses_empty_string(self) -> None:
        record = _record()

        CorrelationIdFilter("medpet_atende").filter(record)

        assert record.correlation_id == ""


class TestJsonFormatter:
    def test_renames_standard_fields_and_keeps_extra(self) -> None:
        record = _record(step="pago")
        CorrelationIdFilter("medpet_atende", lambda: "cid-1").filter(record)

        output = json.loads(create_json_formatter().format(record))

        assert output["level"] == "INFO"
        assert output["logger"] == "app.services.test"
        assert output["message"] == "appointment_completed"
        assert output["correlation_id"] == "cid-1"
        assert output["step"] == "pago"


class TestHelpers:
    def test_user_ref_is_stable_and_hides_phone(self) -> None:
        ref = user_ref("584141234567")

        assert ref == user_ref("584141234567")
        assert len(ref) == 12
        assert "584141234567" not in ref
        assert ref != user_ref("584140000000")

    def test_log_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.fallback")

        with caplog.at_level(logging.INFO, logger="tests.fallback"):
            log_fallback(logger, "assistant_flow", reason="timeout", elapsed_ms=12.5)

        record = caplog.records[-1]
        assert record.getMessage() == "fallback_applied"
        assert record.fallback_used is True
        assert record.component == "assistant_flow"
        assert record.reason == "timeout"
        assert record.elapsed_ms == 12.5

    def test_log_fallback_omits_empty_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.fallback")

        with caplog.at_level(logging.INFO, logger="tests.fallback"):
            log_fallback(logger, "message_handler")

        assert not hasattr(caplog.records[-1], "reason")
