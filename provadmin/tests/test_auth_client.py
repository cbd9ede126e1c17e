from __future__ import annotations

import pytest
import requests

pytestmark = pytest.mark.unit

from conftest import FakeHttpSession, FakeResponse
from provadmin.core.auth.auth_client import AuthRejectedError, AuthServiceClient, AuthTransportError

LOGIN_BODY = {
    "success": True,
    "access_token": "acc",
    "refresh_token": "ref",
    "expires_in": 900,
    "user": {"id": 5, "username": "operator"},
}


def _client(*responses):
    http = FakeHttpSession(*responses)
    return AuthServiceClient("http://auth.test/", session=http), http


def test_login_posts_credentials_and_parses_tokens():
    client, http = _client(FakeResponse(200, LOGIN_BODY))

    tokens = client.login("operator", "secret")

    assert tokens.access_token == "acc"
    assert tokens.expires_in == 900
    assert tokens.user.id == "5"
    sent = http.requests[0]
    assert sent["method"] == "POST"
    assert sent["url"] == "http://auth.test/api/auth/login"
    assert sent["json"] == {"username": "operator", "password": "secret"}
    assert sent["timeout"] is None


def test_login_without_expires_in_defaults_to_one_hour():
    body = {k: v for k, v in LOGIN_BODY.items() if k != "expires_in"}
    client, _ = _client(FakeResponse(200, body))
    assert client.login("operator", "secret").expires_in == 3600


def test_login_rejection_uses_service_detail():
    client, _ = _client(FakeResponse(401, {"detail": "Account locked"}, reason="Unauthorized"))
    with pytest.raises(AuthRejectedError) as excinfo:
        client.login("operator", "secret")
    assert excinfo.value.message == "Account locked"
    assert excinfo.value.status == 401


def test_login_rejection_without_detail_uses_generic_message():
    client, _ = _client(FakeResponse(401, None))
    with pytest.raises(AuthRejectedError) as excinfo:
        client.login("operator", "secret")
    assert excinfo.value.message == "Invalid username or password"


def test_login_transport_failure():
    client, http = _client()
    http.error = requests.ConnectionError("refused")
    with pytest.raises(AuthTransportError) as excinfo:
        client.login("operator", "secret")
    assert "try again" in excinfo.value.message


def test_login_malformed_body_is_a_transport_error():
    client, _ = _client(FakeResponse(200, {"success": True}))
    with pytest.raises(AuthTransportError):
        client.login("operator", "secret")


def test_refresh_sends_refresh_token():
    client, http = _client(FakeResponse(200, {"access_token": "new", "expires_in": 60}))

    tokens = client.refresh("ref")

    assert tokens.access_token == "new"
    assert http.requests[0]["url"].endswith("/api/auth/refresh")
    assert http.requests[0]["json"] == {"refresh_token": "ref"}


def test_refresh_rejected():
    client, _ = _client(FakeResponse(401, {"detail": "expired"}))
    with pytest.raises(AuthRejectedError):
        client.refresh("ref")


def test_logout_sends_bearer_header():
    client, http = _client(FakeResponse(200, {"success": True}))

    client.logout("acc", "ref")

    sent = http.requests[0]
    assert sent["url"].endswith("/api/auth/logout")
    assert sent["headers"]["Authorization"] == "Bearer acc"
    assert sent["json"] == {"refresh_token": "ref"}


def test_logout_failure_raises():
    client, _ = _client(FakeResponse(500, None))
    with pytest.raises(AuthRejectedError):
        client.logout("acc", "ref")
