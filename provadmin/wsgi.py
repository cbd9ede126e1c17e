"""WSGI entrypoint for the provisioning admin console.

``gunicorn provadmin.wsgi:app`` in deployment; ``python provadmin/wsgi.py`` for
a local development server.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

# Running this file directly puts provadmin/ on sys.path instead of the project root.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from provadmin import create_app  # noqa: E402

app = create_app(os.environ.get("APP_ENV"))

if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    app.run(
        host=os.environ.get("FLASK_RUN_HOST", "127.0.0.1"),
        port=int(os.environ.get("FLASK_RUN_PORT", "3000")),
    )
