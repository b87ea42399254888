# rsvp_backend/__main__.py  # Arranque local: python -m rsvp_backend

import uvicorn

from rsvp_backend.config import Settings
from rsvp_backend.main import create_app


def run() -> None:
    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level="info")


if __name__ == "__main__":
    run()
