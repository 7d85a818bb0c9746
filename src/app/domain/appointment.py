"""Modelos de dominio para agendamento de citas.

O rascunho acumula os campos do formulario passo a passo; o passo atual
e os valores validados vem da AppointmentFormMachine.
"""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - usado em runtime pelo schema do Pydantic
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fsm.manager.machine import AppointmentFormMachine
from fsm.states.appointment import FORM_STEPS, AppointmentStep

SHEET_ERROR_MARKER = "Error"


class AppointmentDraft(BaseModel):
    """Rascunho de cita em preenchimento.

    Campos de passos ainda nao alcancados ficam None.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    kind: Literal["appointment"] = "appointment"
    step: AppointmentStep = Field(
        default=AppointmentStep.NAME,
        description="Passo aguardando entrada do usuario.",
    )
    name: str | None = Field(default=None, description="Nome completo do paciente.")
    date: str | None = Field(default=None, description="Data DD/MM/AAAA.")
    time: str | None = Field(default=None, description="Hora 12h ou 24h.")
    consulta: str | None = Field(default=None, description="Tipo de consulta.")
    monto: str | None = Field(default=None, description="Monto com 2 casas decimais.")
    proveedor: str | None = Field(default=None, description="Proveedor ou centro medico.")
    rif: str | None = Field(default=None, description="RIF do proveedor em maiusculas.")
    pago: str | None = Field(default=None, description="Metodo de pagamento.")

    def filled_values(self) -> dict[str, str]:
        """Retorna apenas os campos preenchidos, indexados pelo nome do passo."""
        values: dict[str, str] = {}
        for step in FORM_STEPS:
            value = getattr(self, step.value)
            if value:
                values[step.value] = value
        return values

    def to_machine(self) -> AppointmentFormMachine:
        """Reconstroi a maquina do formulario a partir do rascunho."""
        return AppointmentFormMachine(self.step, self.filled_values())

    @classmethod
    def from_machine(cls, machine: AppointmentFormMachine) -> AppointmentDraft:
        """Cria o rascunho a partir do estado atual da maquina."""
        return cls(step=machine.current_step, **machine.values)

    @property
    def is_complete(self) -> bool:
        return self.step is AppointmentStep.COMPLETED

    def to_sheet_row(self, calendar_event_id: str | None, registered_at: str) -> list[str]:
        """Linha da planilha de registro.

        Ordem: nombre, fecha, hora, registro, consulta, monto, proveedor,
        rif, pago, id do evento (ou "Error" se o calendario falhou).
        """
        return [
            self.name or "",
            self.date or "",
            self.time or "",
            registered_at,
            self.consulta or "",
            self.monto or "0",
            self.proveedor or "",
            self.rif or "",
            self.pago or "",
            calendar_event_id or SHEET_ERROR_MARKER,
        ]


class CalendarEvent(BaseModel):
    """Evento lido ou criado no provedor de calendario."""

    model_config = ConfigDict(extra="ignore")

    event_id: str = Field(..., description="Identificador unico do evento no calendario.")
    summary: str = Field(default="", description="Titulo do evento.")
    start: datetime = Field(..., description="Data/hora de inicio do evento.")
    end: datetime | None = Field(default=None, description="Data/hora de fim do evento.")
    html_link: str | None = Field(
        default=None,
        description="URL publica para visualizar o evento.",
    )
    status: str = Field(default="confirmed", description="Status atual do evento.")


__all__ = ["SHEET_ERROR_MARKER", "AppointmentDraft", "CalendarEvent"]
