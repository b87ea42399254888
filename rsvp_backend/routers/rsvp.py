# rsvp_backend/routers/rsvp.py  # Router público del formulario RSVP y listado para los novios.

# =================================================================================
# 💌 Router: Envío y listado de RSVPs
# ---------------------------------------------------------------------------------
# POST /api/rsvp  → Recibido → Validado → Guardado → Notificado → Respondido
#                   (salidas tempranas: 400 si no valida, 500 si no se guarda).
# GET  /api/rsvps → Todas las respuestas, la más reciente primero.
# =================================================================================

import json
import secrets
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool

from rsvp_backend.deps import get_notifier, get_store
from rsvp_backend.errors import InvalidRSVP, PayloadTooLarge
from rsvp_backend.notifier import WhatsAppNotifier, mask_phone
from rsvp_backend.schemas import RSVPListResponse, RSVPRecord, SubmissionResponse, validate_rsvp
from rsvp_backend.security import require_admin
from rsvp_backend.storage import JsonFileStore

router = APIRouter(prefix="/api", tags=["rsvp"])

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
MAX_BODY_BYTES = 1024 * 1024                                                          # 1 MB por petición.


# 🧰 Helpers
# ---------------------------------------------------------------------------------
def _to_base36(value: int) -> str:
    if value <= 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_rsvp_id(now: Optional[datetime] = None) -> str:
    """Id opaco: milisegundos en base 36 + sufijo aleatorio (evita colisiones en el mismo tick)."""
    now = now or datetime.now(timezone.utc)
    return f"{_to_base36(int(now.timestamp() * 1000))}-{secrets.token_hex(4)}"


def iso_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo Z (2026-03-19T13:00:00.000Z)."""
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sort_newest_first(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Orden descendente por createdAt; los empates conservan el orden guardado (sort estable)."""
    return sorted(rows, key=lambda row: str(row.get("createdAt") or ""), reverse=True)


def _process_submission(raw: Any, store: JsonFileStore, notifier: WhatsAppNotifier) -> SubmissionResponse:
    valid = validate_rsvp(raw)
    if isinstance(valid, str):
        logger.info("RSVP rechazado: {}", valid)
        raise InvalidRSVP(valid)                                                      # 400, no se intenta guardar.

    now = datetime.now(timezone.utc)
    record = RSVPRecord.from_payload(valid, rsvp_id=new_rsvp_id(now), created_at=iso_timestamp(now))

    store.append(record)                                                              # StorageError → 500, sin notificar.
    logger.info("RSVP guardado | id={} | attendance={} | guests={} | phone={}",
                record.id, record.attendance, record.guests, mask_phone(record.phone))

    result = notifier.send_confirmation(record)                                       # Nunca lanza; el fallo viaja como dato.
    return SubmissionResponse(rsvpId=record.id, whatsappSent=result.sent, whatsappError=result.error)


async def _read_body(request: Request) -> bytes:
    """Lee el cuerpo por trozos y corta en cuanto supera MAX_BODY_BYTES."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > MAX_BODY_BYTES:
        raise PayloadTooLarge()

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > MAX_BODY_BYTES:
            raise PayloadTooLarge()
        chunks.append(chunk)
    return b"".join(chunks)


# =================================================================================
# 📝 POST /api/rsvp — Enviar respuesta
# ---------------------------------------------------------------------------------
@router.post("/rsvp", status_code=status.HTTP_201_CREATED, response_model=SubmissionResponse)
async def submit_rsvp(
    request: Request,
    store: JsonFileStore = Depends(get_store),
    notifier: WhatsAppNotifier = Depends(get_notifier),
):
    body = await _read_body(request)
    try:
        raw = json.loads(body)
    except ValueError:                                                                # Cuerpo vacío o JSON inválido → objeto vacío.
        raw = {}

    # Guardado y notificación son bloqueantes: se ejecutan fuera del event loop.
    response = await run_in_threadpool(_process_submission, raw, store, notifier)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=response.model_dump())


# =================================================================================
# 📋 GET /api/rsvps — Listado para los novios
# ---------------------------------------------------------------------------------
@router.get("/rsvps", response_model=RSVPListResponse, dependencies=[Depends(require_admin)])
def list_rsvps(store: JsonFileStore = Depends(get_store)) -> RSVPListResponse:
    rows = sort_newest_first(store.read_all())                                        # StorageError → 500, nunca lista parcial.
    return RSVPListResponse(total=len(rows), items=rows)
