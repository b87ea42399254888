# conftest.py
# -------------------------------------------------------------------------------------
# Archivo: conftest.py (raíz del proyecto)
# Propósito: fixtures compartidas por la suite.
#   - settings / settings_whatsapp: configuración aislada (fichero JSON en tmp_path).
#   - store: almacén JSON sobre tmp_path.
#   - make_client: TestClient de FastAPI con colaboradores inyectados.
#   - FakeResponse: respuesta mínima de requests para monkeypatch de requests.post.
# Ninguna prueba toca la red ni el fichero real data/rsvps.json.
# -------------------------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from rsvp_backend.config import Settings
from rsvp_backend.main import create_app
from rsvp_backend.storage import JsonFileStore


class FakeResponse:
    """Sustituto de requests.Response con lo que usa el código (ok, status_code, json)."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "rsvps.json"


@pytest.fixture
def settings(data_file) -> Settings:
    """WhatsApp sin configurar."""
    return Settings(data_file=data_file)


@pytest.fixture
def settings_whatsapp(data_file) -> Settings:
    return Settings(
        data_file=data_file,
        twilio_account_sid="AC123",
        twilio_auth_token="secret-token",
        twilio_whatsapp_from="whatsapp:+14155238886",
        couple_names="Ana and Luis",
        whatsapp_timeout=5,
    )


@pytest.fixture
def store(data_file) -> JsonFileStore:
    return JsonFileStore(data_file)


@pytest.fixture
def make_client():
    """Construye un TestClient a partir de Settings (y colaboradores opcionales)."""

    def _make(settings: Settings, **collaborators) -> TestClient:
        return TestClient(create_app(settings, **collaborators))

    return _make


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)


@pytest.fixture
def valid_body() -> dict:
    return {
        "name": "Jane Doe",
        "phone": "+27731234567",
        "attendance": "yes",
        "guests": 2,
        "message": "Can't wait!",
    }
