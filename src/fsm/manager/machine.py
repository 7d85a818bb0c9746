"""
Máquina de estados do formulário de cita.

Mantém o passo atual e os valores já validados. Separa a avaliação
(`evaluate`, sem efeito) da confirmação (`commit`), porque o passo de
hora precisa consultar a agenda entre as duas.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from fsm.rules.guards import GuardResult, evaluate_step_guard
from fsm.states.appointment import (
    DEFAULT_INITIAL_STEP,
    FORM_STEPS,
    AppointmentStep,
    is_terminal,
    next_step,
)
from fsm.transitions.rules import is_transition_valid
from fsm.types.transition import StepTransition, TransitionResult


class AppointmentFormMachine:
    """
    Formulário passo a passo de agendamento.

    Invariantes:
        - só existem valores para passos já concluídos;
        - COMPLETED só é alcançado com todos os campos preenchidos.

    Attributes:
        current_step: Passo aguardando entrada
        values: Valores validados por campo (cópia)
        history: Transições realizadas (cópia)
    """

    __slots__ = ("_current_step", "_history", "_values")

    def __init__(
        self,
        current_step: AppointmentStep | None = None,
        values: Mapping[str, str] | None = None,
    ) -> None:
        step = current_step or DEFAULT_INITIAL_STEP
        provided = dict(values or {})
        expected = _fields_before(step)
        unexpected = set(provided) - set(expected)
        if unexpected:
            raise ValueError(
                f"Campos além do passo {step.name}: {sorted(unexpected)}"
            )
        missing = [name for name in expected if not provided.get(name)]
        if missing:
            raise ValueError(f"Campos ausentes antes do passo {step.name}: {missing}")

        self._current_step = step
        self._values = provided
        self._history: list[StepTransition] = []

    @property
    def current_step(self) -> AppointmentStep:
        return self._current_step

    @property
    def values(self) -> dict[str, str]:
        return dict(self._values)

    @property
    def history(self) -> list[StepTransition]:
        return list(self._history)

    @property
    def is_completed(self) -> bool:
        return is_terminal(self._current_step)

    def evaluate(self, text: str, today: date) -> GuardResult:
        """
        Valida a entrada para o passo atual sem alterar o estado.

        Args:
            text: Texto enviado pelo usuário
            today: Data de referência no fuso da clínica
        """
        return evaluate_step_guard(self._current_step, text, today)

    def commit(self, value: str, trigger: str = "user_input") -> TransitionResult:
        """
        Armazena o valor do passo atual e avança para o próximo.

        Args:
            value: Valor já normalizado por `evaluate`
            trigger: Identificador do gatilho para auditoria

        Returns:
            TransitionResult com sucesso/falha
        """
        if self.is_completed:
            return TransitionResult(
                success=False,
                error_reason=f"Passo {self._current_step.name} é terminal",
            )
        if not value:
            return TransitionResult(success=False, error_reason="empty_value")

        target = next_step(self._current_step)
        if not is_transition_valid(self._current_step, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_step.name} → {target.name}"
                ),
            )

        candidate = {**self._values, self._current_step.value: value}
        if is_terminal(target):
            missing = [step.value for step in FORM_STEPS if not candidate.get(step.value)]
            if missing:
                return TransitionResult(
                    success=False,
                    error_reason=f"Campos ausentes para concluir: {missing}",
                )

        transition = StepTransition(
            from_step=self._current_step,
            to_step=target,
            trigger=trigger,
        )
        self._values = candidate
        self._current_step = target
        self._history.append(transition)
        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo seguro para logs (sem valores)."""
        return {
            "current_step": self._current_step.value,
            "is_completed": self.is_completed,
            "filled_fields": sorted(self._values),
            "transition_count": len(self._history),
        }


def _fields_before(step: AppointmentStep) -> tuple[str, ...]:
    if is_terminal(step):
        return tuple(s.value for s in FORM_STEPS)
    return tuple(s.value for s in FORM_STEPS[: FORM_STEPS.index(step)])
