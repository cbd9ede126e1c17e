"""Subscriber service layer: thin wrappers over the provisioning API."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel

from provadmin.core.api.client import ProvisioningClient, client_for_request, encode_id
from provadmin.domains.subscribers.schemas import (
    AorUpdate,
    ApnUpdate,
    BlockDataUsageUpdate,
    CreateSubscriberRequest,
    CreditUpdate,
    NetworkAccessUpdate,
    StateUpdate,
    SubscriberResponse,
)

logger = logging.getLogger(__name__)

SUBSCRIBERS_PATH = "/api/v1/subscribers"

GET_ERRORS = {
    404: "Subscriber not found",
    401: "Unauthorized",
    422: "Invalid identifier format",
}


def _client(client: Optional[ProvisioningClient]) -> ProvisioningClient:
    return client or client_for_request()


def get_subscriber(identifier: str, client: Optional[ProvisioningClient] = None) -> SubscriberResponse:
    body = _client(client).get(f"{SUBSCRIBERS_PATH}/{encode_id(identifier)}", errors=GET_ERRORS)
    return SubscriberResponse.from_api(body or {})


def create_subscriber(payload: CreateSubscriberRequest, client: Optional[ProvisioningClient] = None) -> Any:
    result = _client(client).post(SUBSCRIBERS_PATH, payload.to_payload())
    logger.info("Created subscriber iccid=%s", payload.iccid)
    return result


def delete_subscriber(identifier: str, client: Optional[ProvisioningClient] = None) -> Any:
    result = _client(client).delete(f"{SUBSCRIBERS_PATH}/{encode_id(identifier)}")
    logger.info("Deleted subscriber %s", identifier)
    return result


def _patch_section(identifier: str, section: str, payload: BaseModel, client: Optional[ProvisioningClient]) -> Any:
    path = f"{SUBSCRIBERS_PATH}/{encode_id(identifier)}/{section}"
    result = _client(client).patch(path, payload.model_dump())
    logger.info("Updated %s for subscriber %s", section, identifier)
    return result


def patch_state(identifier: str, payload: StateUpdate, client: Optional[ProvisioningClient] = None) -> Any:
    return _patch_section(identifier, "state", payload, client)


def patch_apn(identifier: str, payload: ApnUpdate, client: Optional[ProvisioningClient] = None) -> Any:
    return _patch_section(identifier, "apn", payload, client)


def patch_aor(identifier: str, payload: AorUpdate, client: Optional[ProvisioningClient] = None) -> Any:
    return _patch_section(identifier, "aor", payload, client)


def patch_credit(identifier: str, payload: CreditUpdate, client: Optional[ProvisioningClient] = None) -> Any:
    return _patch_section(identifier, "credit", payload, client)


def patch_block_data_usage(
    identifier: str, payload: BlockDataUsageUpdate, client: Optional[ProvisioningClient] = None
) -> Any:
    return _patch_section(identifier, "block-data-usage", payload, client)


def patch_network_access(
    identifier: str, payload: NetworkAccessUpdate, client: Optional[ProvisioningClient] = None
) -> Any:
    return _patch_section(identifier, "network-access-list", payload, client)


# Section name (as used in edit forms) -> (schema, patch function)
SECTION_UPDATERS = {
    "state": (StateUpdate, patch_state),
    "apn": (ApnUpdate, patch_apn),
    "aor": (AorUpdate, patch_aor),
    "credit": (CreditUpdate, patch_credit),
    "block-data-usage": (BlockDataUsageUpdate, patch_block_data_usage),
    "network-access-list": (NetworkAccessUpdate, patch_network_access),
}
