"""Session value and lifecycle result envelopes."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Optional, Union


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Identity:
    """Denormalized user identity cached next to the credentials; display only."""

    id: str
    username: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "username": self.username}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Identity"]:
        if not isinstance(data, dict):
            return None
        if "id" not in data or "username" not in data:
            return None
        return cls(id=str(data["id"]), username=str(data["username"]))


@dataclass(frozen=True)
class Session:
    """The three correlated credential fields plus the identity snapshot."""

    access_credential: Optional[str] = None
    renewal_credential: Optional[str] = None
    expiry_marker: Optional[int] = None
    identity: Optional[Identity] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.access_credential is None
            and self.renewal_credential is None
            and self.expiry_marker is None
            and self.identity is None
        )

    @property
    def is_complete(self) -> bool:
        return (
            self.access_credential is not None
            and self.renewal_credential is not None
            and self.expiry_marker is not None
            and self.identity is not None
        )


@dataclass(frozen=True)
class Redirect:
    """Navigate to ``target``; nothing else should run for the current call."""

    target: str


@dataclass(frozen=True)
class Continue:
    """Stay on the current surface; ``error`` is user-displayable when set."""

    ok: bool = True
    error: Optional[str] = None


LifecycleResult = Union[Redirect, Continue]

__all__ = ["Identity", "Session", "Redirect", "Continue", "LifecycleResult", "now_ms"]
