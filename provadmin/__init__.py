"""Provisioning admin console application factory and bootstrap."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, redirect, render_template, request, url_for

from provadmin.config import config_by_name
from provadmin.core.auth.csrf import generate_csrf_token
from provadmin.extensions import init_extensions


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()

    app = Flask(
        __name__,
        static_folder=str(Path(__file__).parent / "static"),
        template_folder=str(Path(__file__).parent / "templates"),
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)

    init_extensions(app)
    _register_auth_handlers(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_template_helpers(app)

    @app.get("/")
    def index():
        return redirect(url_for("dashboard_pages.dashboard"))

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    return app


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from provadmin.core.auth.controllers import auth_api_bp, auth_pages_bp
    from provadmin.domains.audit.controllers.pages import audit_pages_bp
    from provadmin.domains.dashboard.pages import dashboard_pages_bp
    from provadmin.domains.subscribers.controllers.pages import subscriber_pages_bp

    app.register_blueprint(auth_pages_bp)
    app.register_blueprint(auth_api_bp, url_prefix="/auth")
    app.register_blueprint(dashboard_pages_bp, url_prefix="/dashboard")
    app.register_blueprint(subscriber_pages_bp, url_prefix="/subscribers")
    app.register_blueprint(audit_pages_bp, url_prefix="/audit")


def _wants_json() -> bool:
    return request.is_json or request.path.startswith("/auth/")


def _register_error_handlers(app: Flask) -> None:
    """HTML error pages, JSON for the session-check endpoint."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        if _wants_json():
            return jsonify({"ok": False, "error": exc.description}), exc.code
        return render_template("errors.html", code=exc.code, message=exc.description), exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        message = str(exc) if (app.debug or app.testing) else "unexpected_error"
        if _wants_json():
            return jsonify({"ok": False, "error": message}), 500
        return render_template("errors.html", code=500, message=message), 500


def _register_auth_handlers(app: Flask) -> None:
    """Session gate first, then the mount-time renewal check and identity hydration."""
    from provadmin.core.auth import gate
    from provadmin.core.auth.session_context import (
        as_response,
        build_renewal_monitor,
        flush_credentials,
        get_credential_store,
        hydrate_identity,
    )

    @app.before_request
    def _session_gate():
        if gate.is_exempt(request.path):
            return None
        decision = gate.evaluate(
            request.path,
            get_credential_store().has_access_credential(),
            landing_path=app.config["LANDING_PATH"],
            login_path=app.config["LOGIN_PATH"],
        )
        if not isinstance(decision, gate.Admit):
            return as_response(decision)
        if gate.is_public(request.path):
            return None

        # Page load counts as a monitor mount; the browser script covers the rest.
        if request.method == "GET":
            response = as_response(build_renewal_monitor().check())
            if response is not None:
                return response
        hydrate_identity()
        return None

    app.after_request(flush_credentials)


def _register_template_helpers(app: Flask) -> None:
    from provadmin.core.auth.constants import RENEWAL_CHECK_INTERVAL_MS
    from provadmin.core.auth.session_context import get_identity_store
    from provadmin.utils.rfc3339 import display_rfc3339

    app.add_template_filter(display_rfc3339, "rfc3339")

    @app.context_processor
    def inject_helpers():
        return {
            "csrf_token": generate_csrf_token,
            "current_identity": get_identity_store().get(),
            "renewal_interval_ms": RENEWAL_CHECK_INTERVAL_MS,
        }


# WSGI entrypoint compatibility
app = create_app()
