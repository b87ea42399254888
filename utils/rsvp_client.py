# utils/rsvp_client.py
# =============================================================================
# Lógica del formulario RSVP del lado del invitado (sin Streamlit)
# - Normaliza y revalida el teléfono antes de enviar (feedback inmediato).
# - Envía el RSVP a la API y traduce la respuesta a un resultado para la UI.
# - Si la API no responde (red, timeout, error HTTP) prepara el enlace wa.me
#   pre-rellenado para que la respuesta del invitado nunca se pierda.
# =============================================================================

import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from loguru import logger

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000").rstrip("/")
COUPLE_WHATSAPP = os.getenv("COUPLE_WHATSAPP", "27700000000")                # Número de los novios, formato internacional sin '+'.
REQUEST_TIMEOUT = 15

PHONE_RE = re.compile(r"^\+[1-9]\d{9,14}$", re.ASCII)

MSG_REQUIRED = "Please complete all required fields."
MSG_BAD_PHONE = "Enter a valid phone in international format, e.g. +27731234567."
MSG_SENT = "Thank you. RSVP saved and WhatsApp confirmation sent."
MSG_SAVED = "Thank you. RSVP saved, but WhatsApp was not sent."
MSG_FALLBACK = "Server is unavailable. WhatsApp was opened so you can still submit manually."


@dataclass
class RSVPForm:
    name: str
    phone: str
    attendance: str
    guests: int = 1
    message: str = ""

    @classmethod
    def from_inputs(cls, name: str, phone: str, attendance: str, guests: Any, message: str) -> "RSVPForm":
        """Limpia los valores tal y como llegan de los widgets."""
        return cls(
            name=(name or "").strip(),
            phone=clean_phone(phone),
            attendance=(attendance or "").strip().lower(),
            guests=int(guests or 1),
            message=(message or "").strip(),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "phone": self.phone,
            "attendance": self.attendance,
            "guests": self.guests,
            "message": self.message,
        }


@dataclass
class SubmitOutcome:
    kind: str                                                                 # "sent" | "saved" | "fallback"
    message: str
    rsvp_id: Optional[str] = None
    fallback_url: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.kind in ("sent", "saved")


class RSVPSubmitError(Exception):
    """Fallo de red o respuesta no exitosa: dispara el enlace de respaldo."""


def clean_phone(raw: str) -> str:
    """Quita cualquier espacio en blanco del teléfono."""
    return re.sub(r"\s+", "", raw or "")


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(phone or ""))


def check_form(form: RSVPForm) -> Optional[str]:
    """Validación previa al envío; devuelve el mensaje de error o None."""
    if not form.name or not form.phone or form.attendance not in ("yes", "no"):
        return MSG_REQUIRED
    if not is_valid_phone(form.phone):
        return MSG_BAD_PHONE
    return None


def attendance_label(attendance: str) -> str:
    return "Yes, attending" if attendance == "yes" else "No, not attending"


def build_fallback_url(form: RSVPForm, couple_number: str = COUPLE_WHATSAPP) -> str:
    """Enlace wa.me con el mismo contenido que habría recibido el servidor."""
    lines = [
        "Wedding RSVP",
        f"Name: {form.name}",
        f"Phone: {form.phone}",
        f"Attendance: {attendance_label(form.attendance)}",
        f"Guests: {form.guests}",
    ]
    if form.message:
        lines.append(f"Message: {form.message}")
    text = quote("\n".join(lines), safe="-_.!~*'()")                          # Mismo juego de caracteres que encodeURIComponent.
    return f"https://wa.me/{couple_number}?text={text}"


def _post(api_base_url: str, payload: Dict[str, Any], timeout: float) -> Dict[str, Any]:
    try:
        resp = requests.post(f"{api_base_url}/api/rsvp", json=payload, timeout=timeout)
    except requests.exceptions.RequestException as exc:
        raise RSVPSubmitError(str(exc)) from exc

    try:
        result = resp.json() or {}
    except ValueError:
        result = {}
    if not isinstance(result, dict):
        result = {}

    if not resp.ok or result.get("ok") is False:
        raise RSVPSubmitError(result.get("error") or "Could not submit RSVP.")
    return result


def submit_rsvp(
    form: RSVPForm,
    api_base_url: str = API_BASE_URL,
    couple_number: str = COUPLE_WHATSAPP,
    timeout: float = REQUEST_TIMEOUT,
) -> SubmitOutcome:
    """Envía el RSVP; ante cualquier fallo devuelve el resultado de respaldo con el enlace wa.me."""
    try:
        result = _post(api_base_url.rstrip("/"), form.to_payload(), timeout)
    except RSVPSubmitError as exc:
        logger.warning("Envío del RSVP falló, se usa enlace de WhatsApp: {}", exc)
        return SubmitOutcome(
            kind="fallback",
            message=MSG_FALLBACK,
            fallback_url=build_fallback_url(form, couple_number),
        )

    rsvp_id = result.get("rsvpId")
    if result.get("whatsappSent"):
        return SubmitOutcome(kind="sent", message=MSG_SENT, rsvp_id=rsvp_id)

    detail = result.get("whatsappError")
    message = f"{MSG_SAVED} Details: {detail}" if detail else MSG_SAVED
    return SubmitOutcome(kind="saved", message=message, rsvp_id=rsvp_id)
