from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit

from conftest import FakeHttpSession, FakeResponse
from provadmin.core.api.client import ProvisioningApiError, ProvisioningClient
from provadmin.domains.subscribers import services
from provadmin.domains.subscribers.schemas import CreditUpdate, StateUpdate

ICCID = "89310000000000000001"


def _client(*responses):
    http = FakeHttpSession(*responses)
    return ProvisioningClient("http://api.test", "tok", session=http), http


def test_get_subscriber_wraps_response():
    client, http = _client(
        FakeResponse(200, {"data": {"iccid": ICCID, "msisdn": "31612345678"}, "status": "ok", "request_id": "r-1"})
    )

    result = services.get_subscriber(ICCID, client=client)

    assert result.data.iccid == ICCID
    assert result.request_id == "r-1"
    assert result.cached is False
    assert http.requests[0]["url"] == f"http://api.test/api/v1/subscribers/{ICCID}"


@pytest.mark.parametrize(
    "status, message",
    [(404, "Subscriber not found"), (422, "Invalid identifier format"), (401, "Unauthorized")],
)
def test_get_subscriber_maps_errors(status, message):
    client, _ = _client(FakeResponse(status, {"detail": "raw"}))
    with pytest.raises(ProvisioningApiError) as excinfo:
        services.get_subscriber(ICCID, client=client)
    assert excinfo.value.message == message
    assert excinfo.value.status == status


def test_patch_functions_target_their_section():
    client, http = _client(FakeResponse(200, {"status": "ok"}), FakeResponse(200, {"status": "ok"}))

    services.patch_state(ICCID, StateUpdate(subscriber_state=False), client=client)
    services.patch_credit(ICCID, CreditUpdate(max_credit=10), client=client)

    assert [r["method"] for r in http.requests] == ["PATCH", "PATCH"]
    assert http.requests[0]["url"].endswith(f"/api/v1/subscribers/{ICCID}/state")
    assert http.requests[0]["json"] == {"subscriber_state": False}
    assert http.requests[1]["url"].endswith("/credit")
    assert http.requests[1]["json"] == {"max_credit": 10.0}


def test_section_updaters_cover_every_edit_section():
    assert set(services.SECTION_UPDATERS) == {
        "state",
        "apn",
        "aor",
        "credit",
        "block-data-usage",
        "network-access-list",
    }


def test_delete_subscriber_escapes_identifier():
    client, http = _client(FakeResponse(204, None))
    services.delete_subscriber("31612345678", client=client)
    assert http.requests[0]["method"] == "DELETE"
    assert http.requests[0]["url"].endswith("/api/v1/subscribers/31612345678")
