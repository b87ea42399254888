# rsvp_backend/storage.py

# =================================================================================
# 🗄️ ALMACÉN DE RSVPs (fichero JSON, solo-anexar)
# ---------------------------------------------------------------------------------
# - read_all(): crea el fichero vacío ("[]") si no existe; si el contenido no se
#   puede interpretar, lo trata como lista vacía (no es un error fatal).
# - append(record): lectura-modificación-escritura de la lista completa.
#   El ciclo está serializado con un Lock (un solo proceso) y la escritura va a un
#   temporal que se mueve con os.replace, así el fichero siempre es una lista válida.
# =================================================================================

import json
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from loguru import logger

from rsvp_backend.errors import StorageError
from rsvp_backend.schemas import RSVPRecord


class JsonFileStore:
    """Colección de RSVPs en un único fichero JSON legible por humanos."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()                                                 # Protege el ciclo read-modify-write.

    # --- Helpers internos -----------------------------------------------------------
    def _ensure_storage(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self.path, "x", encoding="utf-8") as fh:                        # Creación exclusiva: nunca pisa un fichero existente.
                fh.write("[]")
        except FileExistsError:
            return
        logger.info("Almacén creado vacío en {}", self.path)

    def _load(self) -> Tuple[List[Dict[str, Any]], bool]:
        """Devuelve (filas, legible). Las filas que no son objetos se descartan."""
        self._ensure_storage()
        try:
            parsed = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:                                                            # Incluye UnicodeDecodeError.
            logger.warning("Contenido de {} no es JSON válido; se trata como vacío.", self.path)
            return [], False
        if not isinstance(parsed, list):
            logger.warning("Contenido de {} no es una lista; se trata como vacío.", self.path)
            return [], False

        rows = [row for row in parsed if isinstance(row, dict)]
        if len(rows) != len(parsed):
            logger.warning("Se ignoraron {} filas no válidas en {}", len(parsed) - len(rows), self.path)
        return rows, True

    def _preserve_unreadable(self) -> None:
        """Guarda una copia del fichero ilegible antes de sobreescribirlo."""
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        backup = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        os.replace(self.path, backup)
        logger.warning("Fichero ilegible preservado como {}", backup.name)

    def _write(self, rows: List[Dict[str, Any]]) -> None:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(rows, fh, indent=2, ensure_ascii=False)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)                                           # Sustitución atómica del fichero completo.
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    # --- API pública ----------------------------------------------------------------
    def read_all(self) -> List[Dict[str, Any]]:
        """Todas las respuestas en el orden en que se guardaron."""
        try:
            rows, _ = self._load()
        except OSError as exc:
            logger.exception("No se pudo leer el almacén {}", self.path)
            raise StorageError("Could not load RSVPs.") from exc
        return rows

    def append(self, record: RSVPRecord) -> None:
        """Añade una respuesta reescribiendo la lista completa (todo o nada)."""
        with self._lock:
            try:
                rows, readable = self._load()
                if not readable:
                    self._preserve_unreadable()
                rows.append(record.to_storage())
                self._write(rows)
            except OSError as exc:
                logger.exception("No se pudo guardar el RSVP {} en {}", record.id, self.path)
                raise StorageError("Could not store RSVP.") from exc
