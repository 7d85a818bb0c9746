"""Dados de apresentacao da clinica.

Endereco, coordenadas, contato de emergencia e horarios sugeridos sao
constantes de apresentacao, mas ficam em settings para que outra
implantacao possa troca-los sem mexer no fluxo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

_DEFAULT_ALTERNATIVE_SLOTS = ("9:00 AM", "11:00 AM", "2:00 PM", "4:00 PM")


@dataclass(frozen=True)
class ClinicSettings:
    """Configuracoes de apresentacao e regras de agenda da clinica.

    Attributes:
        name: Nome exibido no pin de localizacao
        address: Endereco exibido no pin e nos fallbacks
        latitude: Latitude do pin
        longitude: Longitude do pin
        business_hours: Texto de horario de atendimento
        emergency_phone: Telefone humano de contato
        emergency_wa_id: wa_id do cartao de contato de emergencia
        emergency_contact_name: Nome formatado do cartao de contato
        email: Email de contato
        website: Site exibido no cartao de contato
        conflict_window_minutes: Separacao minima entre citas
        alternative_slots: Horarios sugeridos quando ha conflito
        sample_media_url: URL do anexo de exemplo ("send media")
        sample_media_kind: Tipo do anexo de exemplo
        sample_media_caption: Legenda do anexo de exemplo
    """

    name: str = "ZoroathaProject - Clínica"
    address: str = "Av. Principal, Maracaibo, Zulia, Venezuela"
    latitude: float = 10.4925
    longitude: float = -66.9036
    business_hours: str = (
        "Lunes a Viernes: 8:00 AM - 6:00 PM\nSábados: 8:00 AM - 2:00 PM"
    )
    emergency_phone: str = "+57 3002726932"
    emergency_wa_id: str = "573002726932"
    emergency_contact_name: str = "ZoroathaProject - Emergencias"
    email: str = "cesarthdiz@gmail.com"
    website: str = "https://www.zoroathaproject.com"
    conflict_window_minutes: int = 30
    alternative_slots: tuple[str, ...] = field(
        default_factory=lambda: _DEFAULT_ALTERNATIVE_SLOTS
    )
    sample_media_url: str = "https://s3.amazonaws.com/gndx.dev/medpet-audio.aac"
    sample_media_kind: str = "audio"
    sample_media_caption: str = "🎵 Aquí tienes el archivo de audio solicitado:"

    def validate(self) -> list[str]:
        """Valida regras de agenda e midia.

        Returns:
            Lista de erros de validacao.
        """
        errors: list[str] = []

        if self.conflict_window_minutes <= 0:
            errors.append("CLINIC_CONFLICT_WINDOW_MINUTES deve ser > 0")

        if not self.alternative_slots:
            errors.append("CLINIC_ALTERNATIVE_SLOTS não pode ser vazio")

        if self.sample_media_kind not in ("image", "video", "audio", "document"):
            errors.append(f"CLINIC_SAMPLE_MEDIA_KIND inválido: {self.sample_media_kind}")

        if not -90 <= self.latitude <= 90 or not -180 <= self.longitude <= 180:
            errors.append("CLINIC_LATITUDE/CLINIC_LONGITUDE fora do intervalo")

        return errors


def _parse_slots(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return _DEFAULT_ALTERNATIVE_SLOTS
    return tuple(slot.strip() for slot in raw.split(",") if slot.strip())


def _load_clinic_from_env() -> ClinicSettings:
    """Carrega ClinicSettings de variaveis de ambiente."""
    defaults = ClinicSettings()
    return ClinicSettings(
        name=os.getenv("CLINIC_NAME", defaults.name),
        address=os.getenv("CLINIC_ADDRESS", defaults.address),
        latitude=float(os.getenv("CLINIC_LATITUDE", str(defaults.latitude))),
        longitude=float(os.getenv("CLINIC_LONGITUDE", str(defaults.longitude))),
        business_hours=os.getenv("CLINIC_BUSINESS_HOURS", defaults.business_hours),
        emergency_phone=os.getenv("CLINIC_EMERGENCY_PHONE", defaults.emergency_phone),
        emergency_wa_id=os.getenv("CLINIC_EMERGENCY_WA_ID", defaults.emergency_wa_id),
        emergency_contact_name=os.getenv(
            "CLINIC_EMERGENCY_CONTACT_NAME", defaults.emergency_contact_name
        ),
        email=os.getenv("CLINIC_EMAIL", defaults.email),
        website=os.getenv("CLINIC_WEBSITE", defaults.website),
        conflict_window_minutes=int(
            os.getenv(
                "CLINIC_CONFLICT_WINDOW_MINUTES", str(defaults.conflict_window_minutes)
            )
        ),
        alternative_slots=_parse_slots(os.getenv("CLINIC_ALTERNATIVE_SLOTS")),
        sample_media_url=os.getenv("CLINIC_SAMPLE_MEDIA_URL", defaults.sample_media_url),
        sample_media_kind=os.getenv(
            "CLINIC_SAMPLE_MEDIA_KIND", defaults.sample_media_kind
        ).lower(),
        sample_media_caption=os.getenv(
            "CLINIC_SAMPLE_MEDIA_CAPTION", defaults.sample_media_caption
        ),
    )


@lru_cache(maxsize=1)
def get_clinic_settings() -> ClinicSettings:
    """Retorna instancia cacheada de ClinicSettings."""
    return _load_clinic_from_env()
