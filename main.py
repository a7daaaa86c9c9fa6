"""WSGI entrypoint for the recipe sharing service.

Run with Gunicorn (``gunicorn main:app``) in deployments; ``flask --app main
run`` works for local development.
"""

import logging
import os

from recipeshare import create_app

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


__all__ = ["app"]
