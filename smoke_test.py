# smoke_test.py  # Verificación rápida (smoke test) end-to-end contra una API ya arrancada.
#
# Uso:
#   python -m rsvp_backend            (en otra terminal)
#   SMOKE_BASE_URL=http://127.0.0.1:3000 python smoke_test.py
# Deja un RSVP real en el almacén configurado: usar contra un entorno de pruebas.

import os
import sys
import time
from typing import Any, Dict, Optional

import requests

# -------------------------------
# ⚙️ Configuración (por entorno)
# -------------------------------
BASE_URL = os.getenv("SMOKE_BASE_URL", "http://127.0.0.1:3000").rstrip("/")
ADMIN_API_KEY = os.getenv("SMOKE_ADMIN_KEY", os.getenv("ADMIN_API_KEY", ""))
SMOKE_PHONE = os.getenv("SMOKE_PHONE", "+27731234567")

NOW = int(time.time())
SMOKE_NAME = f"Smoke Guest {NOW}"                                           # Nombre único para encontrarlo en el listado.


# -------------------------------
# 🧰 Utilidades de apoyo
# -------------------------------
def get(path: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
    return requests.get(f"{BASE_URL}{path}", headers=headers or {}, timeout=10)


def post(path: str, payload: Any) -> requests.Response:
    return requests.post(f"{BASE_URL}{path}", json=payload, timeout=15)


def pretty(ok: bool) -> str:
    return "✅" if ok else "❌"


# -------------------------------
# 1) Health
# -------------------------------
def check_health() -> bool:
    r = get("/api/health")
    body = r.json()
    print(f"   whatsapp={body.get('whatsapp')}")
    return r.status_code == 200 and body.get("ok") is True


# -------------------------------
# 2) Validación (400 esperado)
# -------------------------------
def check_validation() -> bool:
    r = post("/api/rsvp", {"name": SMOKE_NAME, "phone": SMOKE_PHONE, "attendance": "yes", "guests": 11})
    return r.status_code == 400 and r.json().get("error") == "Guests must be between 1 and 10."


# -------------------------------
# 3) Envío real (201 esperado)
# -------------------------------
def check_submit() -> Optional[str]:
    r = post("/api/rsvp", {
        "name": SMOKE_NAME,
        "phone": SMOKE_PHONE,
        "attendance": "yes",
        "guests": 2,
        "message": "smoke test",
    })
    if r.status_code != 201:
        print(f"   HTTP {r.status_code}: {r.text}")
        return None
    body = r.json()
    print(f"   rsvpId={body.get('rsvpId')} whatsappSent={body.get('whatsappSent')} "
          f"whatsappError={body.get('whatsappError')}")
    return body.get("rsvpId")


# -------------------------------
# 4) Listado (el nuevo RSVP aparece el primero)
# -------------------------------
def check_listing(rsvp_id: str) -> bool:
    headers = {"x-admin-key": ADMIN_API_KEY} if ADMIN_API_KEY else {}
    r = get("/api/rsvps", headers=headers)
    if r.status_code != 200:
        print(f"   HTTP {r.status_code}: {r.text}")
        return False
    items = r.json().get("items") or []
    return any(item.get("id") == rsvp_id for item in items[:5])


def main() -> int:
    print(f"🚦 Smoke test contra {BASE_URL}")
    try:
        results = {"health": check_health(), "validation": check_validation()}
        rsvp_id = check_submit()
        results["submit"] = rsvp_id is not None
        results["listing"] = bool(rsvp_id) and check_listing(rsvp_id)
    except requests.exceptions.RequestException as exc:
        print(f"❌ No se pudo contactar con la API: {exc}")
        return 1

    for name, ok in results.items():
        print(f"{pretty(ok)} {name}")
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
