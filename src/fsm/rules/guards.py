"""
Guards dos passos do formulário de cita.

Cada guard recebe o texto do usuário e decide se o passo atual pode
avançar, devolvendo o valor normalizado que será armazenado.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from fsm.rules import validators
from fsm.states.appointment import AppointmentStep


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se o passo pode avançar
        value: Valor normalizado a armazenar (se allowed=True)
        reason: Motivo da negação (se allowed=False), sem PII
    """

    __slots__ = ("allowed", "reason", "value")

    def __init__(
        self,
        allowed: bool,
        value: str | None = None,
        reason: str | None = None,
    ) -> None:
        self.allowed = allowed
        self.value = value
        self.reason = reason

    @classmethod
    def allow(cls, value: str) -> GuardResult:
        """Cria resultado permitindo o avanço com o valor normalizado."""
        return cls(allowed=True, value=value)

    @classmethod
    def deny(cls, reason: str) -> GuardResult:
        """Cria resultado negando o avanço."""
        return cls(allowed=False, reason=reason)


StepGuard = Callable[[str, date], GuardResult]


def _min_length_guard(min_length: int, reason: str) -> StepGuard:
    def guard(text: str, today: date) -> GuardResult:
        if not validators.has_min_length(text, min_length):
            return GuardResult.deny(reason)
        return GuardResult.allow(text.strip())

    return guard


def guard_date(text: str, today: date) -> GuardResult:
    """Guard: data DD/MM/AAAA válida e não passada."""
    parsed = validators.parse_date(text, today)
    if parsed is None:
        return GuardResult.deny("invalid_date")
    return GuardResult.allow(validators.format_date(parsed))


def guard_time(text: str, today: date) -> GuardResult:
    """Guard: hora em formato 12h ou 24h. O conflito é checado pelo fluxo."""
    if not validators.is_valid_time(text):
        return GuardResult.deny("invalid_time")
    return GuardResult.allow(validators.normalize_time_text(text))


def guard_monto(text: str, today: date) -> GuardResult:
    """Guard: número positivo, armazenado com 2 casas decimais."""
    amount = validators.normalize_amount(text)
    if amount is None:
        return GuardResult.deny("invalid_amount")
    return GuardResult.allow(amount)


def guard_rif(text: str, today: date) -> GuardResult:
    """Guard: RIF no formato L-00000000-0."""
    rif = validators.normalize_rif(text)
    if rif is None:
        return GuardResult.deny("invalid_rif")
    return GuardResult.allow(rif)


STEP_GUARDS: dict[AppointmentStep, StepGuard] = {
    AppointmentStep.NAME: _min_length_guard(
        validators.MIN_NAME_LENGTH, "name_too_short"
    ),
    AppointmentStep.DATE: guard_date,
    AppointmentStep.TIME: guard_time,
    AppointmentStep.CONSULTA: _min_length_guard(
        validators.MIN_CONSULTA_LENGTH, "consulta_too_short"
    ),
    AppointmentStep.MONTO: guard_monto,
    AppointmentStep.PROVEEDOR: _min_length_guard(
        validators.MIN_PROVEEDOR_LENGTH, "proveedor_too_short"
    ),
    AppointmentStep.RIF: guard_rif,
    AppointmentStep.PAGO: _min_length_guard(
        validators.MIN_PAGO_LENGTH, "pago_too_short"
    ),
}


def evaluate_step_guard(
    step: AppointmentStep,
    text: str,
    today: date,
) -> GuardResult:
    """
    Avalia o guard do passo atual.

    Args:
        step: Passo em que o rascunho está
        text: Texto enviado pelo usuário
        today: Data de referência no fuso da clínica

    Returns:
        GuardResult; passos sem guard (terminais) são sempre negados.
    """
    guard = STEP_GUARDS.get(step)
    if guard is None:
        return GuardResult.deny(f"step_without_input:{step}")
    return guard(text, today)
