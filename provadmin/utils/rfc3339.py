"""Offset-preserving RFC3339 helpers.

The provisioning API speaks RFC3339 with an explicit offset (usually +01:00).
These helpers keep that offset for display and round-trips rather than
converting everything to the server's local zone.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_OFFSET = "+01:00"
_OFFSET_SUFFIX_RE = re.compile(r"([+-]\d{2}:\d{2}|Z)$")
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):(\d{2})$")


class ParsedDateTime(NamedTuple):
    value: datetime
    offset: str


def _offset_to_tz(offset: str) -> Optional[timezone]:
    if offset == "Z":
        return timezone.utc
    match = _OFFSET_RE.match(offset)
    if not match:
        return None
    sign, hours, minutes = match.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return timezone(delta if sign == "+" else -delta)


def parse_rfc3339_with_timezone(value: Optional[str]) -> Optional[ParsedDateTime]:
    """Parse ``value`` and remember its offset; None when empty or invalid.

    A string without an offset is taken to be in the API's default offset.
    """
    if not value:
        return None
    text = value.strip()
    match = _OFFSET_SUFFIX_RE.search(text)
    iso_text = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        parsed = datetime.fromisoformat(iso_text)
    except ValueError:
        logger.warning("Invalid RFC3339 datetime: %s", value)
        return None

    if not match:
        tz = _offset_to_tz(DEFAULT_API_OFFSET)
        return ParsedDateTime(parsed.replace(tzinfo=tz), DEFAULT_API_OFFSET)
    return ParsedDateTime(parsed, match.group(1))


def _local(value: datetime, offset: str) -> Optional[datetime]:
    tz = _offset_to_tz(offset)
    if tz is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def format_datetime_with_timezone(value: datetime, offset: str) -> str:
    """e.g. ``2026-02-03 14:16 +01:00`` or ``2026-02-03 13:16 UTC``."""
    local = _local(value, offset)
    if local is None:
        return value.isoformat(sep=" ", timespec="minutes")
    suffix = "UTC" if offset == "Z" else offset
    return f"{local:%Y-%m-%d %H:%M} {suffix}"


def display_rfc3339(value: Optional[str]) -> str:
    """Jinja filter: API timestamp string -> display string in its own offset."""
    parsed = parse_rfc3339_with_timezone(value)
    if parsed is None:
        return value or "-"
    return format_datetime_with_timezone(parsed.value, parsed.offset)
