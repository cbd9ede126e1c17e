"""Reusable decorators for page controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, TypeVar

from flask import abort, current_app, request

from provadmin.core.api.client import ProvisioningApiError
from provadmin.core.auth.csrf import token_from_request, validate_csrf_token
from provadmin.core.auth.session_context import as_response, get_lifecycle_controller

F = TypeVar("F", bound=Callable)

logger = logging.getLogger(__name__)


def csrf_protected(fn: F) -> F:
    """Validate CSRF token from the form field or the X-CSRF-Token header."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if not current_app.config.get("WTF_CSRF_ENABLED", True):
            return fn(*args, **kwargs)
        if not validate_csrf_token(token_from_request(request)):
            abort(403, description="csrf_failed")
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def expire_on_unauthorized(fn: F) -> F:
    """End the session when the provisioning API rejects the access token."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        try:
            return fn(*args, **kwargs)
        except ProvisioningApiError as exc:
            if exc.status != 401:
                raise
            logger.info("Provisioning API returned 401 for %s", request.path)
            return as_response(get_lifecycle_controller().invalidate())

    return wrapper  # type: ignore[return-value]
