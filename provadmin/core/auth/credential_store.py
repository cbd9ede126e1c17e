"""Cookie-backed credential store.

Holds the access token, refresh token, expiry marker and identity snapshot for
one browser profile. Reads come from the incoming request's cookies; writes are
buffered and applied to the outgoing response, so a read issued after a write
in the same request observes the new value.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from provadmin.core.auth.constants import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    REFRESH_TOKEN_MAX_AGE_SECONDS,
    SESSION_EXPIRES_AT_COOKIE,
    USER_DATA_COOKIE,
    USER_DATA_MAX_AGE_SECONDS,
)
from provadmin.core.auth.session_models import Identity, Session

logger = logging.getLogger(__name__)

CREDENTIAL_COOKIES = (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    SESSION_EXPIRES_AT_COOKIE,
    USER_DATA_COOKIE,
)


@dataclass(frozen=True)
class CookieWrite:
    value: str
    max_age: int
    httponly: bool


class CredentialStore:
    """Thin wrapper over the four session cookies."""

    def __init__(self, cookies: Mapping[str, str], *, secure: bool = False):
        self.secure = secure
        self._values: dict[str, Optional[str]] = {name: cookies.get(name) or None for name in CREDENTIAL_COOKIES}
        # name -> pending write, or None for a pending delete
        self._pending: dict[str, Optional[CookieWrite]] = {}

    # --- reads ---

    @property
    def access_credential(self) -> Optional[str]:
        return self._values[ACCESS_TOKEN_COOKIE]

    @property
    def renewal_credential(self) -> Optional[str]:
        return self._values[REFRESH_TOKEN_COOKIE]

    @property
    def expiry_marker(self) -> Optional[int]:
        raw = self._values[SESSION_EXPIRES_AT_COOKIE]
        if raw is None:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    @property
    def identity(self) -> Optional[Identity]:
        raw = self._values[USER_DATA_COOKIE]
        if raw is None:
            return None
        try:
            return Identity.from_dict(json.loads(raw))
        except ValueError:
            logger.warning("Discarding unparseable user_data cookie")
            return None

    def has_access_credential(self) -> bool:
        return self.access_credential is not None

    def read(self) -> Session:
        return Session(
            access_credential=self.access_credential,
            renewal_credential=self.renewal_credential,
            expiry_marker=self.expiry_marker,
            identity=self.identity,
        )

    # --- writes ---

    def write_session(
        self,
        *,
        access_credential: str,
        renewal_credential: str,
        ttl_seconds: int,
        identity: Identity,
        now: int,
    ) -> None:
        """Replace the whole session in one step."""
        self.write_access(access_credential=access_credential, ttl_seconds=ttl_seconds, now=now)
        self._set(REFRESH_TOKEN_COOKIE, renewal_credential, REFRESH_TOKEN_MAX_AGE_SECONDS, httponly=True)
        self._set(USER_DATA_COOKIE, json.dumps(identity.to_dict(), separators=(",", ":")), USER_DATA_MAX_AGE_SECONDS, httponly=False)

    def write_access(self, *, access_credential: str, ttl_seconds: int, now: int) -> None:
        """Set the access token and its expiry marker together."""
        self._set(ACCESS_TOKEN_COOKIE, access_credential, ttl_seconds, httponly=True)
        self._set(SESSION_EXPIRES_AT_COOKIE, str(now + ttl_seconds * 1000), ttl_seconds, httponly=False)

    def clear(self) -> None:
        for name in CREDENTIAL_COOKIES:
            self._values[name] = None
            self._pending[name] = None

    def _set(self, name: str, value: str, max_age: int, *, httponly: bool) -> None:
        self._values[name] = value
        self._pending[name] = CookieWrite(value=value, max_age=max_age, httponly=httponly)

    # --- response side ---

    @property
    def pending(self) -> dict[str, Optional[CookieWrite]]:
        return dict(self._pending)

    def apply(self, response) -> None:
        """Flush buffered writes onto a werkzeug/Flask response."""
        for name, write in self._pending.items():
            if write is None:
                response.delete_cookie(name, path="/", secure=self.secure, samesite="Lax")
                continue
            response.set_cookie(
                name,
                write.value,
                max_age=write.max_age,
                path="/",
                secure=self.secure,
                httponly=write.httponly,
                samesite="Lax",
            )
        self._pending.clear()


__all__ = ["CredentialStore", "CookieWrite", "CREDENTIAL_COOKIES"]
