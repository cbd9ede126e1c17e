"""Synchronizer-token CSRF protection for the console's state-changing posts.

The token lives in Flask's signed session cookie; forms send it back in a
hidden ``csrf_token`` field and the renewal-monitor script in the
``X-CSRF-Token`` header.
"""

from __future__ import annotations

import secrets
from typing import Optional

from flask import Request, session

CSRF_TOKEN_SESSION_KEY = "_csrf_token"
CSRF_FORM_FIELD = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"


def generate_csrf_token() -> str:
    """Return the session's token, minting one on first use."""
    token = session.get(CSRF_TOKEN_SESSION_KEY)
    if not token:
        token = secrets.token_hex(32)
        session[CSRF_TOKEN_SESSION_KEY] = token
    return token


def rotate_csrf_token() -> str:
    """Drop everything kept in the Flask session and mint a fresh token."""
    session.clear()
    return generate_csrf_token()


def token_from_request(req: Request) -> Optional[str]:
    return req.form.get(CSRF_FORM_FIELD) or req.headers.get(CSRF_HEADER)


def validate_csrf_token(token: Optional[str]) -> bool:
    if not token:
        return False
    expected = session.get(CSRF_TOKEN_SESSION_KEY)
    if not expected:
        return False
    return secrets.compare_digest(token, expected)


__all__ = [
    "CSRF_FORM_FIELD",
    "CSRF_HEADER",
    "generate_csrf_token",
    "rotate_csrf_token",
    "token_from_request",
    "validate_csrf_token",
]
