"""
Exports públicos do módulo fsm/types.
"""

from fsm.types.transition import StepTransition, TransitionResult

__all__ = [
    "StepTransition",
    "TransitionResult",
]
