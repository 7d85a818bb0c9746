"""Settings de integracao com Google Calendar e Google Sheets.

As duas integracoes usam a mesma service account. A credencial pode vir
como JSON completo (GOOGLE_SERVICE_ACCOUNT_JSON) ou como o par
GOOGLE_SERVICE_ACCOUNT_EMAIL + GOOGLE_PRIVATE_KEY.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets"
_TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleCredentialsSettings(BaseModel):
    """Credenciais da service account compartilhada."""

    model_config = ConfigDict(extra="ignore")

    service_account_json: str | None = Field(
        default=None,
        description="Credencial JSON da service account em formato texto.",
    )
    service_account_email: str = Field(
        default="",
        description="client_email da service account.",
    )
    private_key: str = Field(
        default="",
        description="Chave privada PEM; '\\n' literais sao convertidos.",
    )

    @property
    def is_configured(self) -> bool:
        return bool(
            self.service_account_json
            or (self.service_account_email and self.private_key)
        )

    def to_service_account_info(self) -> dict[str, Any]:
        """Monta o dict aceito por Credentials.from_service_account_info.

        Raises:
            ValueError: Se nenhuma forma de credencial estiver configurada
                ou o JSON for invalido.
        """
        if self.service_account_json:
            try:
                info = json.loads(self.service_account_json)
            except json.JSONDecodeError as exc:
                raise ValueError("GOOGLE_SERVICE_ACCOUNT_JSON invalido") from exc
            if not isinstance(info, dict):
                raise ValueError("GOOGLE_SERVICE_ACCOUNT_JSON invalido")
            return info
        if not (self.service_account_email and self.private_key):
            raise ValueError("credenciais Google nao configuradas")
        return {
            "type": "service_account",
            "client_email": self.service_account_email,
            "private_key": self.private_key.replace("\\n", "\n"),
            "token_uri": _TOKEN_URI,
        }


class CalendarSettings(BaseModel):
    """Configuracoes de calendar usadas pelo fluxo de agendamento."""

    model_config = ConfigDict(extra="ignore")

    google_calendar_id: str = Field(
        default="",
        description="ID do calendario alvo no Google Calendar.",
    )
    calendar_timezone: str = Field(
        default="America/Caracas",
        description="Timezone da clinica para criar e listar eventos.",
    )
    event_duration_min: int = Field(
        default=60,
        ge=1,
        description="Duracao padrao de uma cita em minutos.",
    )
    reminder_email_min: int = Field(
        default=24 * 60,
        ge=0,
        description="Antecedencia do lembrete por email.",
    )
    reminder_popup_min: int = Field(
        default=60,
        ge=0,
        description="Antecedencia do lembrete popup.",
    )
    request_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Limite de cada chamada a API do Calendar.",
    )
    calendar_enabled: bool = Field(
        default=True,
        description="Feature flag da integracao real com calendario.",
    )
    credentials: GoogleCredentialsSettings = Field(
        default_factory=GoogleCredentialsSettings,
    )

    def validate_config(self) -> list[str]:
        errors: list[str] = []
        if not self.calendar_enabled:
            return errors
        if not self.google_calendar_id:
            errors.append("GOOGLE_CALENDAR_ID não configurado")
        if not self.credentials.is_configured:
            errors.append(
                "GOOGLE_SERVICE_ACCOUNT_EMAIL/GOOGLE_PRIVATE_KEY não configurados"
            )
        return errors


class SheetsSettings(BaseModel):
    """Configuracoes da planilha de registro de citas."""

    model_config = ConfigDict(extra="ignore")

    spreadsheet_id: str = Field(
        default="",
        description="ID da planilha (sem barra final).",
    )
    append_range: str = Field(
        default="'Hoja 1'!A1",
        description="Range A1 usado no values.append.",
    )
    request_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Limite de cada chamada a API do Sheets.",
    )
    sheets_enabled: bool = Field(
        default=True,
        description="Feature flag da integracao real com planilha.",
    )
    credentials: GoogleCredentialsSettings = Field(
        default_factory=GoogleCredentialsSettings,
    )

    def validate_config(self) -> list[str]:
        errors: list[str] = []
        if not self.sheets_enabled:
            return errors
        if not self.spreadsheet_id:
            errors.append("GOOGLE_SHEETS_SPREADSHEET_ID não configurado")
        if not self.credentials.is_configured:
            errors.append(
                "GOOGLE_SERVICE_ACCOUNT_EMAIL/GOOGLE_PRIVATE_KEY não configurados"
            )
        return errors


def _read_optional_env(key: str) -> str | None:
    """Retorna valor opcional da env sem propagar string vazia."""
    raw_value = os.getenv(key)
    if raw_value is None:
        return None
    stripped_value = raw_value.strip()
    return stripped_value or None


def _parse_bool(value: str) -> bool:
    """Converte texto de env em bool."""
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_credentials_from_env() -> GoogleCredentialsSettings:
    return GoogleCredentialsSettings(
        service_account_json=_read_optional_env("GOOGLE_SERVICE_ACCOUNT_JSON"),
        service_account_email=os.getenv("GOOGLE_SERVICE_ACCOUNT_EMAIL", ""),
        private_key=os.getenv("GOOGLE_PRIVATE_KEY", ""),
    )


def _load_calendar_from_env() -> CalendarSettings:
    """Carrega CalendarSettings a partir de variaveis de ambiente."""
    return CalendarSettings(
        google_calendar_id=os.getenv("GOOGLE_CALENDAR_ID", ""),
        calendar_timezone=os.getenv("CALENDAR_TIMEZONE", "America/Caracas"),
        event_duration_min=int(os.getenv("CALENDAR_EVENT_DURATION_MIN", "60")),
        request_timeout_seconds=float(
            os.getenv("CALENDAR_REQUEST_TIMEOUT_SECONDS", "20")
        ),
        calendar_enabled=_parse_bool(os.getenv("CALENDAR_ENABLED", "true")),
        credentials=_load_credentials_from_env(),
    )


def _load_sheets_from_env() -> SheetsSettings:
    """Carrega SheetsSettings a partir de variaveis de ambiente."""
    return SheetsSettings(
        spreadsheet_id=os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID", ""),
        append_range=os.getenv("GOOGLE_SHEETS_RANGE", "'Hoja 1'!A1"),
        request_timeout_seconds=float(
            os.getenv("SHEETS_REQUEST_TIMEOUT_SECONDS", "20")
        ),
        sheets_enabled=_parse_bool(os.getenv("SHEETS_ENABLED", "true")),
        credentials=_load_credentials_from_env(),
    )


@lru_cache(maxsize=1)
def get_calendar_settings() -> CalendarSettings:
    """Retorna instancia cacheada de CalendarSettings."""
    return _load_calendar_from_env()


@lru_cache(maxsize=1)
def get_sheets_settings() -> SheetsSettings:
    """Retorna instancia cacheada de SheetsSettings."""
    return _load_sheets_from_env()


__all__ = [
    "CALENDAR_SCOPE",
    "SHEETS_SCOPE",
    "CalendarSettings",
    "GoogleCredentialsSettings",
    "SheetsSettings",
    "get_calendar_settings",
    "get_sheets_settings",
]
