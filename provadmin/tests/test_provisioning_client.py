from __future__ import annotations

import pytest
import requests

pytestmark = pytest.mark.unit

from conftest import FakeHttpSession, FakeResponse
from provadmin.core.api.client import (
    ProvisioningApiError,
    ProvisioningClient,
    encode_id,
    extract_error_message,
)


@pytest.mark.parametrize(
    "detail, expected",
    [
        ({"msg": "Top level"}, "Top level"),
        ({"detail": {"reason": "Duplicate ICCID"}}, "Duplicate ICCID"),
        ({"detail": {"message": "Bad input"}}, "Bad input"),
        ({"detail": "Plain detail"}, "Plain detail"),
        ({"detail": {"code": 7}}, '{"code": 7}'),
        ({"other": 1}, '{"other": 1}'),
        (None, "Bad Gateway"),
    ],
)
def test_extract_error_message(detail, expected):
    assert extract_error_message(detail, "Bad Gateway") == expected


def test_encode_id_escapes_reserved_characters():
    assert encode_id("a/b c") == "a%2Fb%20c"


def test_request_without_access_token_fails_locally():
    http = FakeHttpSession()
    client = ProvisioningClient("http://api.test", None, session=http)

    with pytest.raises(ProvisioningApiError) as excinfo:
        client.get("/api/v1/subscribers/x")

    assert excinfo.value.status == 401
    assert http.requests == []


def test_request_sends_bearer_token_and_decodes_json():
    http = FakeHttpSession(FakeResponse(200, {"ok": 1}))
    client = ProvisioningClient("http://api.test/", "tok", session=http)

    assert client.get("/api/v1/audit", params={"skip": "0"}) == {"ok": 1}

    sent = http.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "http://api.test/api/v1/audit"
    assert sent["headers"]["Authorization"] == "Bearer tok"
    assert sent["params"] == {"skip": "0"}


def test_mapped_status_message_wins():
    http = FakeHttpSession(FakeResponse(404, {"detail": "nope"}, reason="Not Found"))
    client = ProvisioningClient("http://api.test", "tok", session=http)

    with pytest.raises(ProvisioningApiError) as excinfo:
        client.get("/x", errors={404: "Subscriber not found"})

    assert excinfo.value.message == "Subscriber not found"
    assert excinfo.value.detail == {"detail": "nope"}


def test_unmapped_status_uses_body_message():
    http = FakeHttpSession(FakeResponse(409, {"detail": {"reason": "Already exists"}}))
    client = ProvisioningClient("http://api.test", "tok", session=http)

    with pytest.raises(ProvisioningApiError) as excinfo:
        client.post("/x", {"a": 1})

    assert excinfo.value.status == 409
    assert excinfo.value.message == "Already exists"


def test_transport_error_maps_to_503():
    http = FakeHttpSession()
    http.error = requests.Timeout("slow")
    client = ProvisioningClient("http://api.test", "tok", session=http)

    with pytest.raises(ProvisioningApiError) as excinfo:
        client.delete("/x")

    assert excinfo.value.status == 503


def test_empty_success_body_returns_none():
    http = FakeHttpSession(FakeResponse(204, None))
    client = ProvisioningClient("http://api.test", "tok", session=http)
    assert client.delete("/x") is None
