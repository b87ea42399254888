# rsvp_backend/main.py                                                               # Punto de entrada de la API.

# =================================================================================
# 🧠 NÚCLEO DE LA APLICACIÓN API (FastAPI)
# ---------------------------------------------------------------------------------
# - create_app(): construye la app con sus colaboradores explícitos
#   (Settings, almacén JSON, notificador de WhatsApp) guardados en app.state.
# - Configura CORS y el manejador de errores {ok: false, error}.
# - Registra routers (meta, rsvp).
# =================================================================================

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from rsvp_backend import __version__
from rsvp_backend.config import SERVICE_NAME, Settings
from rsvp_backend.errors import RSVPError
from rsvp_backend.notifier import WhatsAppNotifier
from rsvp_backend.routers import meta, rsvp
from rsvp_backend.storage import JsonFileStore


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[JsonFileStore] = None,
    notifier: Optional[WhatsAppNotifier] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="API de RSVP de la boda",
        description="Recibe confirmaciones de asistencia, las guarda y confirma por WhatsApp",
        version=__version__,
    )

    app.state.settings = settings
    app.state.store = store or JsonFileStore(settings.data_file)
    app.state.notifier = notifier or WhatsAppNotifier(settings)

    allow_all = settings.cors_origins == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=not allow_all,                                             # '*' y credenciales no se combinan.
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RSVPError)
    async def _rsvp_error_handler(_request: Request, exc: RSVPError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"ok": False, "error": exc.message})

    app.include_router(meta.router)
    app.include_router(rsvp.router)

    logger.info(
        "[BOOT] service={} | whatsapp={} | data_file={}",
        SERVICE_NAME,
        settings.whatsapp_status,
        settings.data_file,
    )
    return app
