"""Turn submitted HTML form fields into schema input dicts."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

ZONES = ("zoneNL", "zone1", "zone2", "zone3", "zone4", "zone5")
_TRUTHY = ("on", "true", "1", "yes")


def _checkbox(form: Mapping[str, str], name: str) -> bool:
    return (form.get(name) or "").lower() in _TRUTHY


def _text(form: Mapping[str, str], name: str) -> str:
    return (form.get(name) or "").strip()


def _optional_text(form: Mapping[str, str], name: str):
    value = _text(form, name)
    return value or None


def _number(raw: str, cast):
    # Leave unparseable input as-is so the schema reports it.
    try:
        return cast(raw)
    except (TypeError, ValueError):
        return raw


def _speed(raw: str):
    raw = (raw or "").strip()
    if raw.lower() == "max":
        return "max"
    return _number(raw, int)


def _zones(form: Mapping[str, str], prefix: str = "") -> dict[str, bool]:
    return {zone: _checkbox(form, f"{prefix}{zone}") for zone in ZONES}


def parse_create_form(form: Mapping[str, str]) -> dict[str, Any]:
    apn_enabled = _checkbox(form, "apn_enabled")
    return {
        "iccid": _text(form, "iccid"),
        "msisdn": _text(form, "msisdn"),
        "cust_id": _text(form, "cust_id"),
        "admin_info": _text(form, "admin_info"),
        "subscriber_state": _checkbox(form, "subscriber_state"),
        "aor": {
            "domain_id": _number(_text(form, "aor_domain_id"), int),
            "auth_username": _text(form, "aor_auth_username"),
            "auth_password": _text(form, "aor_auth_password"),
        },
        "apn_enabled": apn_enabled,
        "apn": (
            {
                "name": _text(form, "apn_name"),
                "speed_up": _speed(form.get("apn_speed_up", "")),
                "speed_down": _speed(form.get("apn_speed_down", "")),
            }
            if apn_enabled
            else None
        ),
        "network_access_list": _zones(form),
        "contract": {
            "service_package": _number(_text(form, "service_package"), int),
            "service_profile": _number(_text(form, "service_profile"), int),
            "duration": _number(_text(form, "duration"), int),
        },
        "credit": {"max_credit": _number(_text(form, "max_credit"), float)},
    }


def parse_section_form(section: str, form: Mapping[str, str]) -> dict[str, Any]:
    """Input dict for one edit section of the detail page."""
    if section == "state":
        return {"subscriber_state": _checkbox(form, "subscriber_state")}
    if section == "apn":
        return {
            "name": _text(form, "name"),
            "speed_up": _speed(form.get("speed_up", "")),
            "speed_down": _speed(form.get("speed_down", "")),
        }
    if section == "aor":
        return {
            "domain_id": _number(_text(form, "domain_id"), int),
            "auth_username": _text(form, "auth_username"),
            "auth_password": _text(form, "auth_password"),
        }
    if section == "credit":
        return {"max_credit": _number(_text(form, "max_credit"), float)}
    if section == "network-access-list":
        return _zones(form)
    if section == "block-data-usage":
        enabled = _checkbox(form, "enabled")
        return {
            "enabled": enabled,
            "block_until": _optional_text(form, "block_until") if enabled else None,
            "scope": _optional_text(form, "scope") if enabled else None,
        }
    raise KeyError(section)


def field_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten pydantic errors into {"dotted.path": message} for inline display."""
    errors: dict[str, str] = {}
    for err in exc.errors():
        path = ".".join(str(part) for part in err.get("loc", ())) or "__all__"
        message = str(err.get("msg", "Invalid value"))
        # Drop pydantic's "Value error, " prefix on custom validator messages.
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        errors.setdefault(path, message)
    return errors
