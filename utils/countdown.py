# utils/countdown.py
# Cuenta atrás hasta la boda (días, horas, minutos, segundos).

import os
from datetime import datetime, timezone
from typing import NamedTuple, Optional

WEDDING_DATE = os.getenv("WEDDING_DATE", "2026-03-19T15:00:00+02:00")


class Countdown(NamedTuple):
    days: int
    hours: int
    minutes: int
    seconds: int

    def as_labels(self) -> dict:
        """Horas/minutos/segundos con dos dígitos, como en la tarjeta de la web."""
        return {
            "days": str(self.days),
            "hours": f"{self.hours:02d}",
            "minutes": f"{self.minutes:02d}",
            "seconds": f"{self.seconds:02d}",
        }


def parse_wedding_date(value: str = WEDDING_DATE) -> datetime:
    target = datetime.fromisoformat(value)
    if target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)
    return target


def countdown_parts(target: datetime, now: Optional[datetime] = None) -> Countdown:
    """Tiempo restante; todo a cero una vez pasada la fecha."""
    now = now or datetime.now(timezone.utc)
    remaining = int((target - now).total_seconds())
    if remaining <= 0:
        return Countdown(0, 0, 0, 0)
    days, rest = divmod(remaining, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(days, hours, minutes, seconds)
