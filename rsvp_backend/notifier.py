# rsvp_backend/notifier.py  # Envío de la confirmación por WhatsApp (Twilio).

# =================================================================================
# 📲 NOTIFICADOR DE WHATSAPP
# ---------------------------------------------------------------------------------
# - Solo está activo si Settings trae SID + token + remitente; si no, cada llamada
#   devuelve "no enviado" sin tocar la red.
# - Nunca lanza: cualquier fallo de transporte o respuesta no-2xx se devuelve como
#   NotificationResult(sent=False, error="...").
# - Se invoca SIEMPRE después de guardar el RSVP; su resultado acompaña a la
#   respuesta, no la sustituye.
# =================================================================================

from dataclasses import dataclass
from typing import Optional

import requests
from loguru import logger

from rsvp_backend.config import Settings
from rsvp_backend.schemas import RSVPRecord

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
GENERIC_SEND_ERROR = "WhatsApp send failed."


@dataclass(frozen=True)
class NotificationResult:
    sent: bool
    error: Optional[str] = None

    @classmethod
    def skipped(cls) -> "NotificationResult":
        return cls(sent=False, error=None)                                            # Sin configuración: ni enviado ni error.

    @classmethod
    def failed(cls, error: str) -> "NotificationResult":
        return cls(sent=False, error=error or GENERIC_SEND_ERROR)


def mask_phone(phone: Optional[str]) -> str:
    """Enmascara el teléfono para los logs (+27*******67)."""
    if not phone:
        return "<no-phone>"
    if len(phone) <= 5:
        return phone[:1] + "***"
    return phone[:3] + "*" * (len(phone) - 5) + phone[-2:]


def build_confirmation_message(record: RSVPRecord, couple_names: str) -> str:
    """Texto de confirmación: varía según asista o no; siempre cierra con agradecimiento y firma."""
    attendance_text = (
        "Great news, we received your RSVP as attending."
        if record.attendance == "yes"
        else "We received your RSVP."
    )
    return " ".join([
        f"Hi {record.name},",
        attendance_text,
        "Thank you for responding to our wedding invitation.",
        f"With love, {couple_names}",
    ])


def _whatsapp_address(value: str) -> str:
    value = value.strip()
    return value if value.startswith("whatsapp:") else f"whatsapp:{value}"


def _error_from_response(resp: requests.Response) -> str:
    """Extrae el 'message' del JSON de error de Twilio, si lo hay."""
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    detail = payload.get("message") if isinstance(payload, dict) else None           # Proxies pueden devolver listas o texto.
    return str(detail or f"WhatsApp send failed (HTTP {resp.status_code}).")


class WhatsAppNotifier:
    """Envía mensajes de WhatsApp a través de la API REST de Twilio."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self._http = session or requests                                              # Sesión inyectable (tests/reutilización).

    @property
    def enabled(self) -> bool:
        return self.settings.whatsapp_enabled

    def send_confirmation(self, record: RSVPRecord) -> NotificationResult:
        if not self.enabled:
            logger.debug("WhatsApp no configurado; se omite confirmación para {}", record.id)
            return NotificationResult.skipped()

        try:
            return self._send(record)
        except requests.RequestException as exc:
            logger.warning("WhatsApp: error de transporte | rsvp={} | to={} | err={}",
                           record.id, mask_phone(record.phone), exc)
            return NotificationResult.failed(str(exc))
        except Exception as exc:                                                      # Ningún fallo sale del notificador.
            logger.exception("WhatsApp: error inesperado | rsvp={}", record.id)
            return NotificationResult.failed(str(exc))

    def _send(self, record: RSVPRecord) -> NotificationResult:
        cfg = self.settings
        resp = self._http.post(
            TWILIO_MESSAGES_URL.format(sid=cfg.twilio_account_sid),
            data={
                "From": _whatsapp_address(cfg.twilio_whatsapp_from),
                "To": _whatsapp_address(record.phone),
                "Body": build_confirmation_message(record, cfg.couple_names),
            },
            auth=(cfg.twilio_account_sid, cfg.twilio_auth_token),
            timeout=cfg.whatsapp_timeout,
        )

        if not resp.ok:
            error = _error_from_response(resp)
            logger.warning("WhatsApp: Twilio rechazó el envío | rsvp={} | to={} | status={} | err={}",
                           record.id, mask_phone(record.phone), resp.status_code, error)
            return NotificationResult.failed(error)

        logger.info("WhatsApp: confirmación ENVIADA | rsvp={} | to={}", record.id, mask_phone(record.phone))
        return NotificationResult(sent=True)
