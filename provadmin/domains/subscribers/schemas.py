"""Subscriber DTOs and validation schemas."""

from __future__ import annotations

import re
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, NonNegativeInt, field_validator, model_validator

ICCID_RE = re.compile(r"^8931\d{16}$")
MSISDN_RE = re.compile(r"^(316\d{8}|31970\d{8})$")
CUST_ID_RE = re.compile(r"^9[0-9]{6}$")
AOR_CREDENTIAL_RE = re.compile(r"^\+?[a-zA-Z0-9\-.@*#]{4,16}$")
APN_NAME_RE = re.compile(r"^([a-z0-9\-.]){2,43}\.[a-z]{2,10}$")

ICCID_MESSAGE = "ICCID must be 20 digits starting with 8931"
MSISDN_MESSAGE = "MSISDN must be 316XXXXXXXX (11 digits) or 31970XXXXXXXX (13 digits)"

Speed = Union[Literal["max"], NonNegativeInt]
BlockScope = Literal["outside_eu_regulation", "all"]


def validate_iccid(value: str) -> str:
    if not ICCID_RE.match(value):
        raise ValueError(ICCID_MESSAGE)
    return value


def validate_msisdn(value: str) -> str:
    if not MSISDN_RE.match(value):
        raise ValueError(MSISDN_MESSAGE)
    return value


def validate_subscriber_id(value: str) -> str:
    """Accept either an ICCID or an MSISDN."""
    value = (value or "").strip()
    if ICCID_RE.match(value) or MSISDN_RE.match(value):
        return value
    raise ValueError("Identifier must be a valid ICCID or MSISDN")


def _validate_apn_name(value: str) -> str:
    if not APN_NAME_RE.match(value):
        raise ValueError("Invalid APN name")
    return value


# --- nested sections ---


class AorInfo(BaseModel):
    domain_id: int = Field(ge=1, le=99999)
    auth_username: str
    auth_password: str

    @field_validator("auth_username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not AOR_CREDENTIAL_RE.match(v):
            raise ValueError("Invalid AOR username")
        return v

    @field_validator("auth_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not AOR_CREDENTIAL_RE.match(v):
            raise ValueError("Invalid AOR password")
        return v


class ApnInfo(BaseModel):
    name: str
    speed_up: Speed
    speed_down: Speed

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_apn_name(v)


class NetworkAccessList(BaseModel):
    zoneNL: bool
    zone1: bool
    zone2: bool
    zone3: bool
    zone4: bool
    zone5: bool


class BlockDataUsage(BaseModel):
    enabled: bool
    block_until: Optional[str] = None
    scope: Optional[BlockScope] = None


class ContractInfo(BaseModel):
    service_package: int
    service_profile: int = Field(ge=0, le=7)
    duration: int
    contract_start: Optional[str] = None


class CreditInfo(BaseModel):
    max_credit: float = Field(ge=0, le=99999.99)


# --- read model ---


class Subscriber(BaseModel):
    iccid: str
    imsi: Optional[str] = None
    msisdn: str
    cust_id: str
    admin_info: str
    subscriber_state: bool
    aor: AorInfo
    apn: Optional[ApnInfo] = None
    network_access_list: NetworkAccessList
    block_data_usage: BlockDataUsage
    contract: ContractInfo
    credit: CreditInfo

    # The API is the source of truth for stored values; don't re-validate them.
    @classmethod
    def from_api(cls, data: dict) -> "Subscriber":
        return cls.model_construct(
            **{
                **data,
                "aor": AorInfo.model_construct(**(data.get("aor") or {})),
                "apn": ApnInfo.model_construct(**data["apn"]) if data.get("apn") else None,
                "network_access_list": NetworkAccessList.model_construct(**(data.get("network_access_list") or {})),
                "block_data_usage": BlockDataUsage.model_construct(**(data.get("block_data_usage") or {})),
                "contract": ContractInfo.model_construct(**(data.get("contract") or {})),
                "credit": CreditInfo.model_construct(**(data.get("credit") or {})),
            }
        )


class SubscriberResponse(BaseModel):
    data: Subscriber
    status: str
    reason: Optional[str] = None
    request_id: str
    cached: bool = False

    @classmethod
    def from_api(cls, body: dict) -> "SubscriberResponse":
        return cls.model_construct(
            data=Subscriber.from_api(body.get("data") or {}),
            status=body.get("status", ""),
            reason=body.get("reason"),
            request_id=body.get("request_id", ""),
            cached=bool(body.get("cached", False)),
        )


# --- forms ---


class SearchForm(BaseModel):
    mode: Literal["iccid", "msisdn"]
    value: str = Field(min_length=1)

    @model_validator(mode="after")
    def validate_value_for_mode(self) -> "SearchForm":
        self.value = self.value.strip()
        if self.mode == "iccid":
            validate_iccid(self.value)
        else:
            validate_msisdn(self.value)
        return self


class CreateSubscriberRequest(BaseModel):
    iccid: str
    msisdn: str
    cust_id: str
    admin_info: str = Field(min_length=1, max_length=24)
    subscriber_state: bool
    aor: AorInfo
    apn_enabled: bool
    apn: Optional[ApnInfo] = None
    network_access_list: NetworkAccessList
    contract: ContractInfo
    credit: CreditInfo

    @field_validator("iccid")
    @classmethod
    def check_iccid(cls, v: str) -> str:
        return validate_iccid(v)

    @field_validator("msisdn")
    @classmethod
    def check_msisdn(cls, v: str) -> str:
        return validate_msisdn(v)

    @field_validator("cust_id")
    @classmethod
    def validate_cust_id(cls, v: str) -> str:
        if not CUST_ID_RE.match(v):
            raise ValueError("Customer ID must be 7 digits starting with 9")
        return v

    @model_validator(mode="after")
    def require_apn_when_enabled(self) -> "CreateSubscriberRequest":
        if self.apn_enabled and self.apn is None:
            raise ValueError("APN settings are required when APN is enabled")
        return self

    def to_payload(self) -> dict:
        """Body for POST /api/v1/subscribers."""
        return {
            "iccid": self.iccid,
            "msisdn": self.msisdn,
            "cust_id": self.cust_id,
            "admin_info": self.admin_info,
            "aor": self.aor.model_dump(),
            "apn": self.apn.model_dump() if self.apn_enabled and self.apn else None,
            "subscriber_state": self.subscriber_state,
            "network_access_list": self.network_access_list.model_dump(),
            "contract": self.contract.model_dump(exclude_none=True),
            "credit": self.credit.model_dump(),
        }


class StateUpdate(BaseModel):
    subscriber_state: bool


class ApnUpdate(ApnInfo):
    pass


class AorUpdate(BaseModel):
    domain_id: int = Field(ge=1, le=99999)
    auth_username: str = Field(min_length=4, max_length=32)
    auth_password: str = Field(min_length=4, max_length=32)


class CreditUpdate(CreditInfo):
    pass


class NetworkAccessUpdate(NetworkAccessList):
    pass


class BlockDataUsageUpdate(BlockDataUsage):
    pass


class DeleteSubscriberForm(BaseModel):
    identifier: str

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        return validate_subscriber_id(v)
