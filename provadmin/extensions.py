"""Shared extensions for the provisioning admin console."""

import requests
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

PROVISIONING_HTTP_EXTENSION = "provisioning_http"

# Limits, storage and the on/off switch come from RATELIMIT_* config keys.
limiter = Limiter(key_func=get_remote_address)


def init_extensions(app) -> None:
    """Initialize all extensions with the Flask app."""
    limiter.init_app(app)
    # One pooled HTTP session for every provisioning API call in this process.
    app.extensions.setdefault(PROVISIONING_HTTP_EXTENSION, requests.Session())
