"""Credential lifecycle: acquire (login), renew (refresh), revoke (logout).

The controller is the only writer of the credential store. Each operation
writes all-or-nothing and converges to the same stored outcome when repeated,
so the renewal monitor and explicit user actions may interleave freely without
a lock. Operations that end in a navigation return ``Redirect``; the web layer
performs the actual redirect.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from provadmin.core.auth.auth_client import AuthServiceClient, AuthServiceError
from provadmin.core.auth.constants import (
    SESSION_STATE_ANONYMOUS,
    SESSION_STATE_AUTHENTICATED,
    SESSION_STATE_EXPIRED,
)
from provadmin.core.auth.credential_store import CredentialStore
from provadmin.core.auth.identity_store import IdentityStore
from provadmin.core.auth.session_models import (
    Continue,
    Identity,
    LifecycleResult,
    Redirect,
    now_ms,
)

logger = logging.getLogger(__name__)


class CredentialLifecycleController:
    def __init__(
        self,
        store: CredentialStore,
        auth_service: AuthServiceClient,
        *,
        identity_store: Optional[IdentityStore] = None,
        clock: Callable[[], int] = now_ms,
        landing_path: str = "/dashboard",
        login_path: str = "/login",
    ):
        self.store = store
        self.auth_service = auth_service
        self.identity_store = identity_store
        self.clock = clock
        self.landing_path = landing_path
        self.login_path = login_path

    def state(self) -> str:
        """Derive the lifecycle state from what is currently stored."""
        if not self.store.has_access_credential():
            return SESSION_STATE_EXPIRED if self.store.renewal_credential else SESSION_STATE_ANONYMOUS
        expiry = self.store.expiry_marker
        if expiry is not None and expiry <= self.clock():
            return SESSION_STATE_EXPIRED
        return SESSION_STATE_AUTHENTICATED

    def acquire(self, username: str, password: str) -> LifecycleResult:
        """Log in and store a fresh session, replacing any previous one."""
        try:
            tokens = self.auth_service.login(username, password)
        except AuthServiceError as exc:
            logger.info("Login rejected for %s (status=%s)", username, exc.status)
            return Continue(ok=False, error=exc.message)

        identity = Identity(id=tokens.user.id, username=tokens.user.username)
        self.store.write_session(
            access_credential=tokens.access_token,
            renewal_credential=tokens.refresh_token,
            ttl_seconds=tokens.expires_in,
            identity=identity,
            now=self.clock(),
        )
        logger.info("Session acquired for %s", identity.username)
        return Redirect(self.landing_path)

    def renew(self) -> LifecycleResult:
        """Swap the refresh token for a new access token.

        Any failure is treated as session expiry and never retried here.
        """
        refresh_token = self.store.renewal_credential
        if not refresh_token:
            logger.info("No refresh token stored; ending session")
            return self._expire()

        try:
            tokens = self.auth_service.refresh(refresh_token)
        except AuthServiceError as exc:
            logger.warning("Token refresh failed: %s", exc.message)
            return self._expire()

        self.store.write_access(
            access_credential=tokens.access_token,
            ttl_seconds=tokens.expires_in,
            now=self.clock(),
        )
        return Continue(ok=True)

    def revoke(self) -> Redirect:
        """Log out. Local credentials are always destroyed."""
        access_token = self.store.access_credential
        refresh_token = self.store.renewal_credential
        if access_token and refresh_token:
            try:
                self.auth_service.logout(access_token, refresh_token)
            except AuthServiceError as exc:
                # Remote revocation is best-effort.
                logger.warning("Remote logout failed, clearing locally: %s", exc.message)
        self._clear()
        return Redirect(self.login_path)

    def invalidate(self) -> Redirect:
        """The provisioning API rejected the access token; end the session."""
        logger.info("Access token rejected by the API; ending session")
        return self._expire()

    def _expire(self) -> Redirect:
        self._clear()
        return Redirect(self.login_path)

    def _clear(self) -> None:
        self.store.clear()
        if self.identity_store is not None:
            self.identity_store.clear()


__all__ = ["CredentialLifecycleController"]
