"""
Tipos para registrar transições do formulário de cita.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from fsm.states.appointment import AppointmentStep


@dataclass(frozen=True, slots=True)
class StepTransition:
    """
    Registro imutável de uma mudança de passo.

    Nunca carrega o valor digitado pelo usuário, apenas os passos e o
    gatilho, para que possa ir direto para os logs.

    Attributes:
        from_step: Passo de origem
        to_step: Passo de destino
        trigger: Identificador do gatilho (ex: 'user_input')
        timestamp: Momento da transição (UTC)
    """

    from_step: AppointmentStep
    to_step: AppointmentStep
    trigger: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if not self.trigger or not self.trigger.strip():
            raise ValueError("trigger não pode ser vazio")

    def to_log_dict(self) -> dict[str, Any]:
        """Representação segura para logs."""
        return {
            "from_step": self.from_step.value,
            "to_step": self.to_step.value,
            "trigger": self.trigger,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Resultado de uma tentativa de transição.

    Attributes:
        success: Se a transição foi aplicada
        transition: Dados da transição (se success=True)
        error_reason: Motivo da falha (se success=False)
    """

    success: bool
    transition: StepTransition | None = None
    error_reason: str | None = None

    def __post_init__(self) -> None:
        if self.success and self.transition is None:
            raise ValueError("Transição bem-sucedida deve incluir transition")
        if not self.success and self.error_reason is None:
            raise ValueError("Transição falha deve incluir error_reason")
