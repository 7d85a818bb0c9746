"""
Exports públicos do módulo fsm/manager.
"""

from fsm.manager.machine import AppointmentFormMachine

__all__ = [
    "AppointmentFormMachine",
]
