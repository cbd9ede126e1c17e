"""Request-scoped access to the credential store, controller and monitor."""

from __future__ import annotations

from typing import Optional

from flask import current_app, g, redirect, request

from provadmin.core.auth.auth_client import AuthServiceClient
from provadmin.core.auth.credential_store import CredentialStore
from provadmin.core.auth.identity_store import IdentityStore
from provadmin.core.auth.lifecycle import CredentialLifecycleController
from provadmin.core.auth.renewal_monitor import ProactiveRenewalMonitor
from provadmin.core.auth.session_models import LifecycleResult, Redirect

AUTH_SERVICE_EXTENSION = "auth_service"


def get_auth_service() -> AuthServiceClient:
    service = current_app.extensions.get(AUTH_SERVICE_EXTENSION)
    if service is None:
        service = AuthServiceClient(
            current_app.config["AUTH_API_URL"],
            timeout=current_app.config.get("AUTH_HTTP_TIMEOUT_SECONDS"),
        )
        current_app.extensions[AUTH_SERVICE_EXTENSION] = service
    return service


def get_credential_store() -> CredentialStore:
    if "credential_store" not in g:
        g.credential_store = CredentialStore(
            request.cookies,
            secure=current_app.config.get("COOKIES_SECURE", False),
        )
    return g.credential_store


def get_identity_store() -> IdentityStore:
    if "identity_store" not in g:
        g.identity_store = IdentityStore()
    return g.identity_store


def get_lifecycle_controller() -> CredentialLifecycleController:
    if "lifecycle_controller" not in g:
        g.lifecycle_controller = CredentialLifecycleController(
            get_credential_store(),
            get_auth_service(),
            identity_store=get_identity_store(),
            landing_path=current_app.config.get("LANDING_PATH", "/dashboard"),
            login_path=current_app.config.get("LOGIN_PATH", "/login"),
        )
    return g.lifecycle_controller


def build_renewal_monitor() -> ProactiveRenewalMonitor:
    """Monitor bound to this request's store; run with ``check()``."""
    store = get_credential_store()
    controller = get_lifecycle_controller()
    return ProactiveRenewalMonitor(
        lambda: store.expiry_marker,
        controller.renew,
        clock=controller.clock,
    )


def hydrate_identity() -> None:
    get_identity_store().set(get_credential_store().identity)


def as_response(result: Optional[LifecycleResult]):
    """Turn a Redirect into a Flask redirect; anything else yields None."""
    if isinstance(result, Redirect):
        return redirect(result.target)
    return None


def flush_credentials(response):
    store = g.get("credential_store")
    if store is not None:
        store.apply(response)
    return response


__all__ = [
    "get_auth_service",
    "get_credential_store",
    "get_identity_store",
    "get_lifecycle_controller",
    "build_renewal_monitor",
    "hydrate_identity",
    "as_response",
    "flush_credentials",
]
