# rsvp_backend/config.py                                                             # Ruta del módulo de configuración.

# =================================================================================
# ⚙️ CONFIGURACIÓN DEL SERVICIO
# ---------------------------------------------------------------------------------
# Se construye UNA vez al arrancar el proceso (Settings.from_env) y se pasa de forma
# explícita al notificador, al almacén y a la app. Ningún módulo lee credenciales
# de Twilio desde variables globales después del arranque.
# =================================================================================

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

SERVICE_NAME = "rsvp-backend"                                                         # Nombre público que devuelve /api/health.
DATA_FILE_NAME = Path("data") / "rsvps.json"                                         # Relativo al directorio de trabajo.


def default_data_file() -> Path:
    """data/rsvps.json bajo el directorio desde el que se arranca el proceso."""
    return Path.cwd() / DATA_FILE_NAME


def _env_str(name: str, default: str = "") -> str:
    """Lee una variable de entorno como texto limpio."""
    return (os.getenv(name) or default).strip()


def _env_number(name: str, default, cast):
    """Convierte una variable numérica; si es inválida se usa el default y se avisa."""
    raw = _env_str(name)
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Valor inválido para {}={!r}; se usa {}", name, raw, default)
        return default


class Settings(BaseModel):
    """Configuración inmutable del proceso."""

    model_config = ConfigDict(frozen=True)

    twilio_account_sid: str = ""                                                       # Identificador de la cuenta Twilio.
    twilio_auth_token: str = ""                                                        # Credencial de autenticación Twilio.
    twilio_whatsapp_from: str = ""                                                     # Remitente (número WhatsApp habilitado).
    host: str = "0.0.0.0"
    port: int = 3000
    data_file: Path = Field(default_factory=default_data_file)
    couple_names: str = "Name1 and Name2"                                              # Firma del mensaje de confirmación.
    whatsapp_timeout: float = Field(default=10.0, gt=0)                                # Timeout acotado para la llamada a Twilio.
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    admin_api_key: str = ""                                                            # Si existe, protege GET /api/rsvps.

    @property
    def whatsapp_enabled(self) -> bool:
        """True solo si las tres piezas de Twilio están presentes."""
        return bool(
            self.twilio_account_sid.strip()
            and self.twilio_auth_token.strip()
            and self.twilio_whatsapp_from.strip()
        )

    @property
    def whatsapp_status(self) -> str:
        return "configured" if self.whatsapp_enabled else "not-configured"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        """Carga .env (si existe) y construye la configuración desde el entorno."""
        load_dotenv(dotenv_path=env_file or (Path.cwd() / ".env"))                     # No sobreescribe variables ya exportadas.

        origins = [o.strip() for o in _env_str("CORS_ORIGINS", "*").split(",") if o.strip()]
        data_file = _env_str("RSVP_DATA_FILE")

        return cls(
            twilio_account_sid=_env_str("TWILIO_ACCOUNT_SID"),
            twilio_auth_token=_env_str("TWILIO_AUTH_TOKEN"),
            twilio_whatsapp_from=_env_str("TWILIO_WHATSAPP_FROM"),
            host=_env_str("HOST", "0.0.0.0"),
            port=_env_number("PORT", 3000, int),
            data_file=Path(data_file) if data_file else default_data_file(),
            couple_names=_env_str("COUPLE_NAMES", "Name1 and Name2"),
            whatsapp_timeout=_env_number("WHATSAPP_TIMEOUT", 10.0, float),
            cors_origins=origins or ["*"],
            admin_api_key=_env_str("ADMIN_API_KEY"),
        )
