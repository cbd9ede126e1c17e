"""HTTP client for the remote auth service (login / refresh / logout)."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from provadmin.core.auth.constants import LOGIN_FAILED_MESSAGE, LOGIN_TRANSPORT_MESSAGE
from provadmin.core.auth.schemas import LoginResponse, RefreshResponse

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/auth/login"
REFRESH_PATH = "/api/auth/refresh"
LOGOUT_PATH = "/api/auth/logout"


class AuthServiceError(Exception):
    """Base exception for auth service calls.

    ``message`` is safe to show to the user.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthRejectedError(AuthServiceError):
    """The service answered with a non-success response."""


class AuthTransportError(AuthServiceError):
    """The service could not be reached or answered garbage."""


class AuthServiceClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def login(self, username: str, password: str) -> LoginResponse:
        """Exchange a username/password pair for a token pair."""
        resp = self._post(LOGIN_PATH, {"username": username, "password": password}, LOGIN_TRANSPORT_MESSAGE)
        if not resp.ok:
            raise AuthRejectedError(_error_detail(resp) or LOGIN_FAILED_MESSAGE, resp.status_code)
        return self._parse(resp, LoginResponse, LOGIN_TRANSPORT_MESSAGE)

    def refresh(self, refresh_token: str) -> RefreshResponse:
        resp = self._post(REFRESH_PATH, {"refresh_token": refresh_token}, "Token refresh failed")
        if not resp.ok:
            raise AuthRejectedError("Refresh token rejected", resp.status_code)
        return self._parse(resp, RefreshResponse, "Token refresh failed")

    def logout(self, access_token: str, refresh_token: str) -> None:
        resp = self._post(
            LOGOUT_PATH,
            {"refresh_token": refresh_token},
            "Logout failed",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if not resp.ok:
            raise AuthRejectedError("Logout rejected", resp.status_code)

    # --- helpers ---

    def _post(self, path: str, body: dict, failure_message: str, headers: Optional[dict] = None):
        try:
            return self.session.post(
                f"{self.base_url}{path}",
                json=body,
                headers={"Content-Type": "application/json", **(headers or {})},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Auth service call %s failed: %s", path, exc)
            raise AuthTransportError(failure_message) from exc

    @staticmethod
    def _parse(resp, model, failure_message: str):
        try:
            return model.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Auth service returned an unexpected body: %s", exc)
            raise AuthTransportError(failure_message, resp.status_code) from exc


def _error_detail(resp) -> Optional[str]:
    try:
        body: Any = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    return None


__all__ = [
    "AuthServiceClient",
    "AuthServiceError",
    "AuthRejectedError",
    "AuthTransportError",
]
