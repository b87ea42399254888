# rsvp_backend/security.py
import secrets

from fastapi import Depends, Request
from fastapi.security.api_key import APIKeyHeader

from rsvp_backend.errors import Unauthorized

_api_key_header = APIKeyHeader(name="x-admin-key", auto_error=False)


def require_admin(request: Request, api_key: str = Depends(_api_key_header)) -> None:
    """Protege el listado solo si ADMIN_API_KEY está configurada; si no, queda abierto."""
    expected = request.app.state.settings.admin_api_key
    if not expected:
        return
    if not api_key or not secrets.compare_digest(api_key, expected):
        raise Unauthorized()
