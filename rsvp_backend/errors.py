# rsvp_backend/errors.py

# =================================================================================
# 🚨 Taxonomía de errores de la API
# ---------------------------------------------------------------------------------
# - InvalidRSVP  → 400, el mensaje identifica el campo/regla que falló.
# - StorageError → 500, mensaje opaco (nunca rutas internas ni trazas).
# - PayloadTooLarge → 413, cuerpo por encima de MAX_BODY_BYTES.
# Los fallos de WhatsApp NO son excepciones: viajan como datos (NotificationResult).
# =================================================================================


class RSVPError(Exception):
    """Error base que la API convierte en {ok: false, error}."""

    status_code = 500
    default_message = "Unexpected error."

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRSVP(RSVPError):
    status_code = 400
    default_message = "Invalid RSVP."


class StorageError(RSVPError):
    status_code = 500
    default_message = "Could not store RSVP."


class Unauthorized(RSVPError):
    status_code = 401
    default_message = "Invalid or missing admin key."


class PayloadTooLarge(RSVPError):
    status_code = 413
    default_message = "Request body too large."
