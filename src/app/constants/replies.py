"""Textos enviados ao usuário.

Todo texto voltado ao paciente fica aqui, em espanhol. Dados da clínica
(endereço, telefone, horários) entram por parâmetro a partir de
ClinicSettings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.constants.whatsapp import ButtonId
from app.protocols.models import ReplyButton

if TYPE_CHECKING:
    from collections.abc import Sequence

    from app.domain.appointment import AppointmentDraft, CalendarEvent

DEFAULT_SENDER_NAME = "Client"

MENU_PROMPT = "Selecciona una opción:"
FOLLOWUP_PROMPT = "¿Hay algo más en lo que pueda ayudarte?"

MAIN_MENU_BUTTONS: tuple[ReplyButton, ...] = (
    ReplyButton(id=ButtonId.SCHEDULE, title="📅 Agendar Cita"),
    ReplyButton(id=ButtonId.SERVICES, title="💬 Consultar"),
    ReplyButton(id=ButtonId.LOCATION, title="📍 Ubicación"),
)

FOLLOWUP_BUTTONS: tuple[ReplyButton, ...] = (
    ReplyButton(id=ButtonId.SCHEDULE, title="📅 Agendar Cita"),
    ReplyButton(id=ButtonId.SERVICES, title="💬 Otra Consulta"),
    ReplyButton(id=ButtonId.LOCATION, title="📍 Ubicación"),
)

CANCELLED = "❌ Proceso cancelado. Tu información no fue guardada."
NOTHING_TO_CANCEL = "ℹ️ No tienes ningún proceso activo para cancelar."

GENERIC_APOLOGY = (
    "❌ Lo siento, ocurrió un error inesperado y tuvimos que reiniciar la "
    "conversación.\n\nEscribe *hola* para comenzar de nuevo."
)

# Agenda do dia
AGENDA_EMPTY = "📅 No hay citas programadas para hoy."
AGENDA_ERROR = "❌ Error consultando las citas del día."

MEDIA_ERROR = "❌ Lo siento, hubo un error al enviar el medio."
UNKNOWN_OPTION = (
    "❌ Lo siento, no entendí tu selección. Por favor, elige una de las opciones "
    "del menú."
)

# Agendamento
APPOINTMENT_START = (
    "📅 *Proceso de Agendamiento de Cita*\n\n"
    "Para agendar tu cita, por favor proporciona tu *nombre completo*:\n\n"
    "_Escribe *cancelar* en cualquier momento para salir._"
)
INVALID_NAME = "❌ Por favor ingresa tu *nombre completo* (mínimo 2 caracteres)."
INVALID_DATE = (
    "❌ Fecha inválida. Usa el formato *DD/MM/AAAA* con una fecha de hoy en "
    "adelante.\n\n_Ejemplo: 15/12/2030_"
)
INVALID_TIME = (
    "❌ Hora inválida. Usa el formato *H:MM AM/PM* o *HH:MM*.\n\n"
    "_Ejemplo: 10:30 AM o 14:30_"
)
INVALID_CONSULTA = (
    "❌ Por favor describe el *tipo de consulta* (mínimo 3 caracteres).\n\n"
    "_Ejemplo: Consulta general_"
)
INVALID_MONTO = (
    "❌ Por favor ingresa un *monto válido* (solo números).\n\n💰 Ejemplo: 50, 100, 150"
)
INVALID_PROVEEDOR = (
    "❌ Por favor indica el nombre del *proveedor* o centro médico "
    "(mínimo 2 caracteres)."
)
INVALID_RIF = (
    "❌ RIF inválido. El formato es *letra-8 dígitos-dígito* "
    "(letras V, J, E, G, P o N).\n\n_Ejemplo: J-12345678-9, V-98765432-1_"
)
INVALID_PAGO = (
    "❌ Por favor indica el *método de pago*.\n\n"
    "_Opciones: Efectivo, Tarjeta, Transferencia, Pago móvil, etc._"
)

# Assistente
ASSISTANT_START = (
    "🤖 *Asistente Virtual Activado*\n\n"
    "💬 Hola! Soy tu asistente inteligente. Puedes hacerme cualquier consulta "
    "sobre:\n\n"
    "• Información médica general\n"
    "• Medicamentos y tratamientos\n"
    "• Servicios de la clínica\n"
    "• Cualquier duda de salud\n\n"
    "¿En qué puedo ayudarte hoy?"
)
ASSISTANT_QUESTION_TOO_SHORT = (
    "✍️ Tu consulta es muy corta. Escribe tu pregunta con un poco más de detalle."
)

# Localização e emergência
LOCATION_HEADER = "📍 *Nuestra Ubicación:*\n\nTe comparto nuestra ubicación exacta:"
EMERGENCY_HEADER = (
    "🚑 *Contacto de Emergencia*\n\nTe comparto nuestro contacto de emergencia:"
)


def sender_display_name(profile_name: str | None, sender_id: str | None) -> str:
    """Nome usado na saudação: perfil, wa_id ou valor padrão."""
    return (profile_name or "").strip() or sender_id or DEFAULT_SENDER_NAME


def welcome(name: str) -> str:
    return (
        f"👋 Hola *{name}*, ¡bienvenido/a a nuestro servicio de WhatsApp! "
        "¿En qué puedo ayudarte hoy?"
    )


def agenda_listing(day_label: str, lines: Sequence[tuple[str, str]]) -> str:
    """Lista numerada das citas do dia.

    Args:
        day_label: Data exibida no cabeçalho (DD/MM/AAAA)
        lines: Pares (HH:MM, resumo) já ordenados por início
    """
    body = "\n".join(
        f"{index}. 🕐 {start} - {summary}"
        for index, (start, summary) in enumerate(lines, start=1)
    )
    return f"📅 *Citas de hoy ({day_label}):*\n\n{body}"


def ask_date(name: str) -> str:
    return (
        f"✅ Gracias *{name}*.\n\n"
        "📅 Por favor, proporciona tu *fecha preferida* (formato: DD/MM/AAAA):\n\n"
        "_Ejemplo: 15/12/2030_"
    )


def ask_time(date_text: str) -> str:
    return (
        f"📅 Fecha registrada: *{date_text}*\n\n"
        "🕐 ¿A qué *hora* prefieres tu cita?\n\n"
        "_Ejemplo: 10:30 AM o 14:30_"
    )


def slot_unavailable(date_text: str, alternative_slots: Sequence[str]) -> str:
    slots = "\n".join(f"- {slot}" for slot in alternative_slots)
    return (
        "⚠️ *Horario no disponible*\n\n"
        "🕐 Ya hay una cita programada cerca de esa hora.\n\n"
        f"📅 *Horarios disponibles para {date_text}:*\n"
        f"{slots}\n\n"
        "Por favor elige otro horario:"
    )


def ask_consulta(time_text: str) -> str:
    return f"🕐 Hora registrada: *{time_text}*\n\n💬 ¿Qué tipo de *consulta* necesitas?"


def ask_monto(consulta: str) -> str:
    return (
        f"💬 Tipo de consulta: *{consulta}*\n\n"
        "💰 ¿Cuál es el *monto* de la consulta?\n\n"
        "_Ejemplo: 50, 100, 150 (solo números)_"
    )


def ask_proveedor(monto: str) -> str:
    return (
        f"💰 Monto registrado: *${monto}*\n\n"
        "🏥 ¿Cuál es el nombre del *proveedor* o centro médico?\n\n"
        "_Ejemplo: Clínica San Rafael, Dr. García, etc._"
    )


def ask_rif(proveedor: str) -> str:
    return (
        f"🏥 Proveedor registrado: *{proveedor}*\n\n"
        "📋 Por favor proporciona el *RIF* del proveedor:\n\n"
        "_Ejemplo: J-12345678-9, V-98765432-1_"
    )


def ask_pago(rif: str) -> str:
    return (
        f"📋 RIF registrado: *{rif}*\n\n"
        "💳 ¿Cuál será el *método de pago*?\n\n"
        "_Opciones: Efectivo, Tarjeta, Transferencia, Pago móvil, etc._"
    )


def _summary_lines(draft: AppointmentDraft) -> str:
    return (
        f"👤 *Nombre:* {draft.name}\n"
        f"📅 *Fecha:* {draft.date}\n"
        f"🕐 *Hora:* {draft.time}\n"
        f"💬 *Consulta:* {draft.consulta}\n"
        f"💰 *Monto:* ${draft.monto}\n"
        f"🏥 *Proveedor:* {draft.proveedor}\n"
        f"📋 *RIF:* {draft.rif}\n"
        f"💳 *Método de pago:* {draft.pago}"
    )


def confirmation(draft: AppointmentDraft, event: CalendarEvent) -> str:
    link_line = f"🔗 *Link directo:* {event.html_link}\n" if event.html_link else ""
    return (
        "🎉 *¡CITA CONFIRMADA Y AGENDADA!* 🎉\n\n"
        "📅 *Tu cita ha sido guardada en Google Calendar*\n"
        f"{link_line}\n"
        "📋 *RESUMEN COMPLETO:*\n"
        f"{_summary_lines(draft)}\n\n"
        "✅ *La cita está sincronizada con Google Calendar*\n"
        "📧 *Recibirás recordatorios automáticos*\n\n"
        "¡Gracias por confiar en nosotros!"
    )


def degraded_confirmation(draft: AppointmentDraft) -> str:
    return (
        "⚠️ *Cita registrada* pero hubo un problema con Google Calendar.\n\n"
        "📋 *Datos guardados*\n"
        "❌ *Calendar:* No se pudo sincronizar automáticamente\n\n"
        "📞 *Por favor contacta a soporte para confirmar tu cita*\n\n"
        "*Datos de tu cita:*\n"
        f"👤 {draft.name}\n"
        f"📅 {draft.date} - {draft.time}\n"
        f"💬 {draft.consulta}"
    )


def appointment_info(phone: str) -> str:
    return (
        "ℹ️ *Información importante:*\n\n"
        "• Llega 15 minutos antes de tu cita\n"
        "• Trae tu documento de identidad\n"
        "• Si necesitas reprogramar o cancelar, avísanos con anticipación\n\n"
        f"📞 Contacto: {phone}"
    )


def knowledge_fallback(phone: str) -> str:
    return (
        "❌ Lo siento, no pude procesar tu consulta en este momento. "
        "Por favor intenta de nuevo más tarde.\n\n"
        f"📞 Si es urgente, comunícate con nuestro personal al {phone}."
    )


def business_hours(hours: str, phone: str) -> str:
    return f"🕐 *Horarios de Atención:*\n{hours}\n\n📞 Para emergencias: {phone}"


def location_fallback(address: str, phone: str, email: str) -> str:
    return (
        f"📍 Nuestra ubicación:\n\n{address}\n\n"
        f"📞 Teléfono: {phone}\n📧 Email: {email}"
    )


def emergency_fallback(phone: str, email: str) -> str:
    return f"🚑 En caso de emergencia:\n\n📞 Llama al: {phone}\n📧 Email: {email}"
