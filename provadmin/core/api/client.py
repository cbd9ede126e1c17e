"""Authorized client for the remote provisioning API."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class ProvisioningApiError(Exception):
    """Raised for any non-2xx answer (or a missing access token)."""

    def __init__(self, message: str, status: int, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.detail = detail


def encode_id(identifier: str) -> str:
    return quote(identifier, safe="")


def extract_error_message(detail: Any, fallback: str) -> str:
    """Pick the most specific message out of an API error body."""
    if isinstance(detail, dict):
        if detail.get("msg"):
            return str(detail["msg"])
        inner = detail.get("detail")
        if isinstance(inner, dict):
            if inner.get("reason"):
                return str(inner["reason"])
            if inner.get("message"):
                return str(inner["message"])
        if isinstance(inner, str) and inner:
            return inner
        return json.dumps(inner or detail)
    if detail:
        return json.dumps(detail)
    return fallback or "Request failed"


class ProvisioningClient:
    def __init__(
        self,
        base_url: str,
        access_token: Optional[str],
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        errors: Optional[Mapping[int, str]] = None,
    ) -> Any:
        """Send an authorized request and return the decoded JSON body.

        ``errors`` maps status codes to friendlier messages; unmapped statuses
        fall back to whatever the API body says.
        """
        if not self.access_token:
            raise ProvisioningApiError("Unauthorized", 401)

        try:
            resp = self.session.request(
                method,
                f"{self.base_url}{path}",
                json=json_body,
                params=params,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.access_token}",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Provisioning API %s %s failed: %s", method, path, exc)
            raise ProvisioningApiError("Provisioning API unreachable", 503) from exc

        if not resp.ok:
            try:
                detail = resp.json()
            except ValueError:
                detail = None
            mapped = (errors or {}).get(resp.status_code)
            message = mapped or extract_error_message(detail, resp.reason)
            logger.info("Provisioning API %s %s -> %s", method, path, resp.status_code)
            raise ProvisioningApiError(message, resp.status_code, detail)

        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise ProvisioningApiError("Unexpected response from provisioning API", resp.status_code) from exc

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, body: Any, **kwargs) -> Any:
        return self.request("POST", path, json_body=body, **kwargs)

    def patch(self, path: str, body: Any, **kwargs) -> Any:
        return self.request("PATCH", path, json_body=body, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)


def client_for_request() -> ProvisioningClient:
    """Client carrying the current request's access token."""
    from flask import current_app

    from provadmin.core.auth.session_context import get_credential_store
    from provadmin.extensions import PROVISIONING_HTTP_EXTENSION

    session = current_app.extensions.get(PROVISIONING_HTTP_EXTENSION)
    return ProvisioningClient(
        current_app.config["AUTH_API_URL"],
        get_credential_store().access_credential,
        timeout=current_app.config.get("AUTH_HTTP_TIMEOUT_SECONDS"),
        session=session,
    )


__all__ = [
    "ProvisioningApiError",
    "ProvisioningClient",
    "client_for_request",
    "encode_id",
    "extract_error_message",
]
