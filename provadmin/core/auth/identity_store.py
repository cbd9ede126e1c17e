"""In-memory identity snapshot used for display (never for authorization)."""

from __future__ import annotations

from typing import Optional

from provadmin.core.auth.session_models import Identity


class IdentityStore:
    def __init__(self) -> None:
        self._identity: Optional[Identity] = None

    def set(self, identity: Optional[Identity]) -> None:
        self._identity = identity

    def get(self) -> Optional[Identity]:
        return self._identity

    def clear(self) -> None:
        self._identity = None


__all__ = ["IdentityStore"]
