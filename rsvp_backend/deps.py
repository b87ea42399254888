# rsvp_backend/deps.py
# Dependencias de FastAPI: los colaboradores viven en app.state (ver create_app).

from fastapi import Request

from rsvp_backend.config import Settings
from rsvp_backend.notifier import WhatsAppNotifier
from rsvp_backend.storage import JsonFileStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> JsonFileStore:
    return request.app.state.store


def get_notifier(request: Request) -> WhatsAppNotifier:
    return request.app.state.notifier
