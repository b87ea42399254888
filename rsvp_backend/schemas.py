# rsvp_backend/schemas.py  # Esquemas Pydantic: entrada del formulario, registro y respuestas.

# =================================================================================
# 📦 Schemas (MODELOS DE DATOS Pydantic)
# ---------------------------------------------------------------------------------
# - RSVPPayload: valida y normaliza el cuerpo crudo de POST /api/rsvp.
#   Los campos se validan en orden de declaración; gana el primer error.
# - RSVPRecord: forma persistida (id, createdAt + campos normalizados).
# - Modelos de respuesta para /api/rsvp, /api/rsvps y /api/health.
# Usa Pydantic v2: field_validator, ConfigDict y PydanticCustomError.
# =================================================================================

import math
import re
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

PHONE_RE = re.compile(r"^\+[1-9]\d{9,14}$", re.ASCII)                                           # E.164: '+' y 10–15 dígitos, el primero 1–9.
MIN_GUESTS, MAX_GUESTS = 1, 10

NAME_REQUIRED = "Name is required."
PHONE_REQUIRED = "Phone is required."
PHONE_FORMAT = "Phone must be full international format, for example +27731234567."
ATTENDANCE_INVALID = "Attendance must be yes or no."
GUESTS_RANGE = "Guests must be between 1 and 10."


# =================================================================================
# 🧰 Utilidades de normalización
# =================================================================================
def _as_text(raw: Any) -> str:
    """Convierte cualquier valor JSON a texto; None/False/'' quedan como cadena vacía."""
    if raw is None or raw is False:
        return ""
    return str(raw)


def normalize_phone(raw: Any) -> str:
    """Deja solo dígitos y '+'; antepone '+' si falta. Devuelve '' si no queda nada."""
    cleaned = re.sub(r"[^0-9+]", "", _as_text(raw))
    if not cleaned:
        return ""
    return cleaned if cleaned.startswith("+") else f"+{cleaned}"


def _coerce_guests(raw: Any) -> Optional[int]:
    """Número entero de invitados o None si el valor no es un entero finito."""
    if isinstance(raw, bool):                                                         # true/false del JSON no son cantidades.
        return None
    if isinstance(raw, int):
        return raw
    try:
        value = float(str(raw).strip()) if isinstance(raw, str) else float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value) or not value.is_integer():
        return None
    return int(value)


# =================================================================================
# 📝 Entrada del formulario RSVP
# =================================================================================
class RSVPPayload(BaseModel):
    """Campos normalizados de una respuesta; solo existe si todas las reglas se cumplen."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", validate_default=True)
    phone: str = Field(default="", validate_default=True)
    attendance: Literal["yes", "no"] = Field(default="", validate_default=True)
    guests: int = Field(default=0, validate_default=True)
    message: str = Field(default="", validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _clean_name(cls, v: Any) -> str:
        v = _as_text(v).strip()
        if not v:
            raise PydanticCustomError("name_required", NAME_REQUIRED)
        return v

    @field_validator("phone", mode="before")
    @classmethod
    def _clean_phone(cls, v: Any) -> str:
        phone = normalize_phone(v)
        if not phone:
            raise PydanticCustomError("phone_required", PHONE_REQUIRED)
        if not PHONE_RE.match(phone):
            raise PydanticCustomError("phone_format", PHONE_FORMAT)
        return phone

    @field_validator("attendance", mode="before")
    @classmethod
    def _clean_attendance(cls, v: Any) -> str:
        v = _as_text(v).strip().lower()
        if v not in ("yes", "no"):
            raise PydanticCustomError("attendance_invalid", ATTENDANCE_INVALID)
        return v

    @field_validator("guests", mode="before")
    @classmethod
    def _check_guests(cls, v: Any) -> int:
        guests = _coerce_guests(v)
        if guests is None or not (MIN_GUESTS <= guests <= MAX_GUESTS):
            raise PydanticCustomError("guests_range", GUESTS_RANGE)
        return guests

    @field_validator("message", mode="before")
    @classmethod
    def _clean_message(cls, v: Any) -> str:
        return _as_text(v).strip()                                                    # Mensaje libre: cualquier longitud, incluso vacío.


def validate_rsvp(raw: Any) -> Union[RSVPPayload, str]:
    """
    Valida el cuerpo crudo de una petición.
    Devuelve el payload normalizado o el mensaje del PRIMER error; nunca lanza.
    """
    data = raw if isinstance(raw, dict) else {}                                       # Cualquier cosa que no sea objeto JSON cuenta como vacío.
    try:
        return RSVPPayload.model_validate(data)
    except ValidationError as exc:
        return exc.errors()[0]["msg"]


# =================================================================================
# 🧾 Registro persistido
# =================================================================================
class RSVPRecord(BaseModel):
    """Respuesta guardada: se crea una vez y nunca se modifica."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    created_at: str = Field(alias="createdAt")
    name: str
    phone: str
    attendance: Literal["yes", "no"]
    guests: int
    message: str = ""

    @classmethod
    def from_payload(cls, payload: RSVPPayload, rsvp_id: str, created_at: str) -> "RSVPRecord":
        return cls(id=rsvp_id, created_at=created_at, **payload.model_dump())

    def to_storage(self) -> Dict[str, Any]:
        """Forma JSON en disco y en la API (claves camelCase, orden estable)."""
        return self.model_dump(by_alias=True)


# =================================================================================
# 📤 Respuestas de la API
# =================================================================================
class SubmissionResponse(BaseModel):
    ok: bool = True
    rsvpId: str
    whatsappSent: bool
    whatsappError: Optional[str] = None


class RSVPListResponse(BaseModel):
    ok: bool = True
    total: int
    items: List[Dict[str, Any]]


class HealthResponse(BaseModel):
    ok: bool = True
    service: str
    whatsapp: Literal["configured", "not-configured"]
