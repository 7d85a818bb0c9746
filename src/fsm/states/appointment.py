"""
Passos canônicos do formulário de agendamento.

A ordem é estrita: cada passo só é alcançado depois que o anterior
validou. COMPLETED é terminal e dispara a transação de conclusão.
"""

from enum import StrEnum


class AppointmentStep(StrEnum):
    """
    Passos do formulário de cita.

    Passos de coleta (em ordem):
        NAME, DATE, TIME, CONSULTA, MONTO, PROVEEDOR, RIF, PAGO

    Passo terminal:
        COMPLETED: Todos os campos preenchidos; rascunho pronto para
            ser persistido e descartado.
    """

    NAME = "name"
    DATE = "date"
    TIME = "time"
    CONSULTA = "consulta"
    MONTO = "monto"
    PROVEEDOR = "proveedor"
    RIF = "rif"
    PAGO = "pago"
    COMPLETED = "completed"

    def __str__(self) -> str:
        return self.value


# Passos que coletam um campo, na ordem em que são perguntados
FORM_STEPS: tuple[AppointmentStep, ...] = (
    AppointmentStep.NAME,
    AppointmentStep.DATE,
    AppointmentStep.TIME,
    AppointmentStep.CONSULTA,
    AppointmentStep.MONTO,
    AppointmentStep.PROVEEDOR,
    AppointmentStep.RIF,
    AppointmentStep.PAGO,
)

TERMINAL_STEPS: frozenset[AppointmentStep] = frozenset({AppointmentStep.COMPLETED})

DEFAULT_INITIAL_STEP: AppointmentStep = AppointmentStep.NAME


def is_terminal(step: AppointmentStep) -> bool:
    """Verifica se o passo é terminal."""
    return step in TERMINAL_STEPS


def next_step(step: AppointmentStep) -> AppointmentStep:
    """
    Retorna o passo seguinte na ordem do formulário.

    Args:
        step: Passo atual (não terminal)

    Returns:
        Próximo passo; o sucessor de PAGO é COMPLETED.

    Raises:
        ValueError: Se o passo for terminal.
    """
    if is_terminal(step):
        raise ValueError(f"Passo {step.name} é terminal, não tem sucessor")
    index = FORM_STEPS.index(step)
    if index + 1 < len(FORM_STEPS):
        return FORM_STEPS[index + 1]
    return AppointmentStep.COMPLETED
