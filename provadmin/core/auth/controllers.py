"""Sign-in, sign-out and renewal-check endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, render_template, request
from pydantic import ValidationError

from provadmin.core.auth.constants import LOGIN_FAILED_MESSAGE
from provadmin.core.auth.csrf import rotate_csrf_token
from provadmin.core.auth.schemas import LoginRequest
from provadmin.core.auth.session_context import (
    as_response,
    build_renewal_monitor,
    get_credential_store,
    get_lifecycle_controller,
)
from provadmin.core.auth.session_models import Redirect
from provadmin.core.utils.decorators import csrf_protected
from provadmin.extensions import limiter

auth_pages_bp = Blueprint("auth_pages", __name__)
auth_api_bp = Blueprint("auth_api", __name__)


@auth_pages_bp.get("/login")
def login_page():
    return render_template("auth/login.html", username="", error=None)


@auth_pages_bp.post("/login")
@limiter.limit("10/minute")
@csrf_protected
def login_submit():
    username = request.form.get("username", "")
    try:
        data = LoginRequest.model_validate({"username": username, "password": request.form.get("password", "")})
    except ValidationError:
        return render_template("auth/login.html", username=username, error=LOGIN_FAILED_MESSAGE), 400

    result = get_lifecycle_controller().acquire(data.username, data.password)
    if isinstance(result, Redirect):
        # New sign-in, new CSRF token.
        rotate_csrf_token()
        return as_response(result)
    return render_template("auth/login.html", username=data.username, error=result.error), 401


@auth_pages_bp.post("/logout")
@csrf_protected
def logout():
    return as_response(get_lifecycle_controller().revoke())


# Every open tab polls this on mount, each minute and on focus.
@auth_api_bp.post("/session/check")
@limiter.limit("240/minute")
@csrf_protected
def session_check():
    """One renewal-monitor check, triggered by the browser (mount/tick/focus)."""
    trigger = (request.get_json(silent=True) or {}).get("trigger", "tick")
    result = build_renewal_monitor().check()
    if isinstance(result, Redirect):
        return jsonify({"ok": False, "renewed": False, "redirect": result.target, "trigger": trigger})
    return jsonify(
        {
            "ok": True,
            "renewed": result is not None,
            "redirect": None,
            "expires_at": get_credential_store().expiry_marker,
            "trigger": trigger,
        }
    )
