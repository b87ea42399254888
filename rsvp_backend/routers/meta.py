# rsvp_backend/routers/meta.py  # Router de metadatos: estado del servicio.

from fastapi import APIRouter, Depends

from rsvp_backend.config import SERVICE_NAME, Settings
from rsvp_backend.deps import get_settings
from rsvp_backend.schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Indica que la API responde y si WhatsApp está configurado."""
    return HealthResponse(service=SERVICE_NAME, whatsapp=settings.whatsapp_status)
