"""
Exports públicos do módulo fsm/states.
"""

from fsm.states.appointment import (
    DEFAULT_INITIAL_STEP,
    FORM_STEPS,
    TERMINAL_STEPS,
    AppointmentStep,
    is_terminal,
    next_step,
)

__all__ = [
    "DEFAULT_INITIAL_STEP",
    "FORM_STEPS",
    "TERMINAL_STEPS",
    "AppointmentStep",
    "is_terminal",
    "next_step",
]
