"""
Regras de transição válidas entre passos do formulário.

Cada passo de coleta pode permanecer em si mesmo (entrada inválida ou
conflito de horário) ou avançar apenas para o seu sucessor.
"""

from fsm.states.appointment import (
    FORM_STEPS,
    TERMINAL_STEPS,
    AppointmentStep,
    next_step,
)

TransitionMap = dict[AppointmentStep, frozenset[AppointmentStep]]


def _build_transition_map() -> TransitionMap:
    transitions: TransitionMap = {
        step: frozenset({step, next_step(step)}) for step in FORM_STEPS
    }
    for step in TERMINAL_STEPS:
        transitions[step] = frozenset()
    return transitions


VALID_TRANSITIONS: TransitionMap = _build_transition_map()


def get_valid_targets(step: AppointmentStep) -> frozenset[AppointmentStep]:
    """Retorna os passos de destino válidos a partir de um passo."""
    return VALID_TRANSITIONS.get(step, frozenset())


def is_transition_valid(
    from_step: AppointmentStep,
    to_step: AppointmentStep,
) -> bool:
    """
    Verifica se uma transição é permitida.

    Args:
        from_step: Passo de origem
        to_step: Passo de destino

    Returns:
        True se a transição é permitida
    """
    if from_step in TERMINAL_STEPS:
        return False
    return to_step in get_valid_targets(from_step)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for step in AppointmentStep:
        if step not in VALID_TRANSITIONS:
            errors.append(f"Passo {step.name} ausente em VALID_TRANSITIONS")

    for step in TERMINAL_STEPS:
        if VALID_TRANSITIONS.get(step):
            errors.append(f"Passo terminal {step.name} não deveria ter transições")

    for from_step, targets in VALID_TRANSITIONS.items():
        forward = [t for t in targets if t != from_step]
        if len(forward) > 1:
            errors.append(f"Passo {from_step.name} avança para mais de um destino")

    return errors
