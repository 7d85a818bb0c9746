"""Testes dos guards por passo."""

from __future__ import annotations

from datetime import date

from fsm.rules.guards import GuardResult, evaluate_step_guard
from fsm.states.appointment import AppointmentStep

TODAY = date(2025, 6, 10)


class TestEvaluateStepGuard:
    def test_name_too_short_is_denied(self) -> None:
        result = evaluate_step_guard(AppointmentStep.NAME, " a ", TODAY)

        assert result.allowed is False
        assert result.reason == "name_too_short"

    def test_name_is_stripped(self) -> None:
        result = evaluate_step_guard(AppointmentStep.NAME, "  Ana Pérez ", TODAY)

        assert result.allowed is True
        assert result.value == "Ana Pérez"

    def test_date_is_reformatted_with_leading_zeros(self) -> None:
        result = evaluate_step_guard(AppointmentStep.DATE, "5/7/2025", TODAY)

        assert result.value == "05/07/2025"

    def test_past_date_denied(self) -> None:
        result = evaluate_step_guard(AppointmentStep.DATE, "01/01/2025", TODAY)

        assert result.reason == "invalid_date"

    def test_time_keeps_user_format(self) -> None:
        assert evaluate_step_guard(AppointmentStep.TIME, "10:30am", TODAY).value == "10:30 AM"

    def test_consulta_requires_three_chars(self) -> None:
        assert not evaluate_step_guard(AppointmentStep.CONSULTA, "ab", TODAY).allowed
        assert evaluate_step_guard(AppointmentStep.CONSULTA, "abc", TODAY).allowed

    def test_monto_normalized(self) -> None:
        assert evaluate_step_guard(AppointmentStep.MONTO, "75", TODAY).value == "75.00"

    def test_rif_denied(self) -> None:
        assert evaluate_step_guard(AppointmentStep.RIF, "J-1", TODAY).reason == "invalid_rif"

    def test_completed_has_no_guard(self) -> None:
        result = evaluate_step_guard(AppointmentStep.COMPLETED, "qualquer", TODAY)

        assert result.allowed is False
        assert result.reason == "step_without_input:completed"


class TestGuardResult:
    def test_allow_and_deny_factories(self) -> None:
        assert GuardResult.allow("x").value == "x"
        denied = GuardResult.deny("motivo")
        assert denied.allowed is False
        assert denied.value is None
