"""
Módulo FSM: formulário de agendamento como máquina de estados.

Estrutura:
    - states/: Passos do formulário (AppointmentStep)
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - rules/: Validadores puros e guards por passo
    - manager/: Máquina do formulário (AppointmentFormMachine)
    - types/: Tipos de dados (StepTransition, TransitionResult)
"""

from fsm.manager import AppointmentFormMachine
from fsm.rules import (
    STEP_GUARDS,
    GuardResult,
    evaluate_step_guard,
)
from fsm.states import (
    DEFAULT_INITIAL_STEP,
    FORM_STEPS,
    TERMINAL_STEPS,
    AppointmentStep,
    is_terminal,
    next_step,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StepTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STEP",
    "FORM_STEPS",
    "STEP_GUARDS",
    "TERMINAL_STEPS",
    "VALID_TRANSITIONS",
    "AppointmentFormMachine",
    "AppointmentStep",
    "GuardResult",
    "StepTransition",
    "TransitionResult",
    "evaluate_step_guard",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "next_step",
    "validate_transition_map",
]
