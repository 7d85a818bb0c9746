"""
Validadores puros dos campos do formulário de cita.

Sem I/O e sem estado: recebem texto do usuário e devolvem o valor
normalizado ou None quando a entrada não é aceita.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zoneinfo import ZoneInfo

MIN_YEAR = 2024
MAX_YEAR = 2030

MIN_NAME_LENGTH = 2
MIN_CONSULTA_LENGTH = 3
MIN_PROVEEDOR_LENGTH = 2
MIN_PAGO_LENGTH = 2

_DATE_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_TIME_12H_PATTERN = re.compile(
    r"^(0?[1-9]|1[0-2]):([0-5]\d)\s?([AP]M)$", re.IGNORECASE
)
_TIME_24H_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_RIF_PATTERN = re.compile(r"^[VJEGPN]-\d{8}-\d$")
_CENTS = Decimal("0.01")


def has_min_length(text: str, min_length: int) -> bool:
    """Retorna True se o texto (sem espaços nas pontas) tem o tamanho mínimo."""
    return len(text.strip()) >= min_length


def parse_date(text: str, today: date) -> date | None:
    """
    Converte DD/MM/AAAA em date.

    Rejeita dia fora de 1..31, mês fora de 1..12, ano fora de
    MIN_YEAR..MAX_YEAR, datas inexistentes (31/02) e datas anteriores
    a `today`.

    Args:
        text: Texto enviado pelo usuário
        today: Data de referência no fuso da clínica

    Returns:
        date válida ou None
    """
    match = _DATE_PATTERN.match(text.strip())
    if match is None:
        return None

    day, month, year = (int(part) for part in match.groups())
    if not (1 <= day <= 31 and 1 <= month <= 12 and MIN_YEAR <= year <= MAX_YEAR):
        return None

    try:
        parsed = date(year, month, day)
    except ValueError:
        return None

    if parsed < today:
        return None
    return parsed


def is_valid_date(text: str, today: date) -> bool:
    """Atalho booleano para parse_date."""
    return parse_date(text, today) is not None


def format_date(value: date) -> str:
    """Formata date como DD/MM/AAAA."""
    return value.strftime("%d/%m/%Y")


def parse_time(text: str) -> time | None:
    """
    Converte hora em formato 12h (H:MM AM|PM) ou 24h (H:MM).

    Returns:
        time válido ou None
    """
    candidate = text.strip()

    match = _TIME_12H_PATTERN.match(candidate)
    if match is not None:
        hour = int(match.group(1)) % 12
        if match.group(3).upper() == "PM":
            hour += 12
        return time(hour, int(match.group(2)))

    match = _TIME_24H_PATTERN.match(candidate)
    if match is not None:
        return time(int(match.group(1)), int(match.group(2)))

    return None


def is_valid_time(text: str) -> bool:
    """Atalho booleano para parse_time."""
    return parse_time(text) is not None


def normalize_time_text(text: str) -> str:
    """Normaliza o texto da hora preservando o formato escolhido pelo usuário.

    "10:30am" vira "10:30 AM"; "14:30" permanece "14:30".
    """
    candidate = text.strip()
    match = _TIME_12H_PATTERN.match(candidate)
    if match is not None:
        return f"{int(match.group(1))}:{match.group(2)} {match.group(3).upper()}"
    return candidate


def normalize_amount(text: str) -> str | None:
    """
    Converte um monto positivo em string com 2 casas decimais.

    Aceita vírgula como separador decimal e um prefixo "$" opcional.

    Returns:
        Ex: "50" -> "50.00"; "12,5" -> "12.50"; None se inválido.
    """
    candidate = text.strip().lstrip("$").strip().replace(",", ".")
    if not candidate:
        return None
    try:
        amount = Decimal(candidate)
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    try:
        return str(amount.quantize(_CENTS))
    except InvalidOperation:
        return None


def normalize_rif(text: str) -> str | None:
    """
    Valida e normaliza o RIF para maiúsculas.

    Formato aceito: letra (V, J, E, G, P ou N), hífen, 8 dígitos,
    hífen e dígito verificador.
    """
    candidate = text.strip().upper()
    if _RIF_PATTERN.match(candidate) is None:
        return None
    return candidate


def is_valid_rif(text: str) -> bool:
    """Atalho booleano para normalize_rif."""
    return normalize_rif(text) is not None


def parse_appointment_datetime(
    date_text: str,
    time_text: str,
    tz: ZoneInfo,
) -> datetime | None:
    """
    Combina data e hora do rascunho em um instante com fuso.

    A data não é comparada com hoje aqui: o passo de data já fez isso.

    Returns:
        datetime aware no fuso `tz` ou None se algum campo for inválido.
    """
    match = _DATE_PATTERN.match(date_text.strip())
    parsed_time = parse_time(time_text)
    if match is None or parsed_time is None:
        return None
    day, month, year = (int(part) for part in match.groups())
    try:
        parsed_date = date(year, month, day)
    except ValueError:
        return None
    return datetime.combine(parsed_date, parsed_time, tzinfo=tz)
