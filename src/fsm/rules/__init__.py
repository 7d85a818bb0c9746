"""
Exports públicos do módulo fsm/rules.

Validadores puros e guards dos passos do formulário.
"""

from fsm.rules.guards import (
    STEP_GUARDS,
    GuardResult,
    StepGuard,
    evaluate_step_guard,
)
from fsm.rules.validators import (
    has_min_length,
    is_valid_date,
    is_valid_rif,
    is_valid_time,
    normalize_amount,
    normalize_rif,
    parse_appointment_datetime,
    parse_date,
    parse_time,
)

__all__ = [
    "STEP_GUARDS",
    "GuardResult",
    "StepGuard",
    "evaluate_step_guard",
    "has_min_length",
    "is_valid_date",
    "is_valid_rif",
    "is_valid_time",
    "normalize_amount",
    "normalize_rif",
    "parse_appointment_datetime",
    "parse_date",
    "parse_time",
]
