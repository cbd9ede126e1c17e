"""Per-navigation admission control based on access-token presence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from provadmin.core.auth.constants import GATE_EXEMPT_PREFIXES, PUBLIC_PATHS
from provadmin.core.auth.session_models import Redirect


@dataclass(frozen=True)
class Admit:
    pass


GateDecision = Union[Admit, Redirect]


def is_public(path: str, public_paths: Iterable[str] = PUBLIC_PATHS) -> bool:
    return any(path.startswith(prefix) for prefix in public_paths)


def is_exempt(path: str) -> bool:
    """Static assets and health probes never pass through the gate."""
    return any(path.startswith(prefix) for prefix in GATE_EXEMPT_PREFIXES)


def evaluate(
    path: str,
    has_access_credential: bool,
    *,
    public_paths: Iterable[str] = PUBLIC_PATHS,
    landing_path: str = "/dashboard",
    login_path: str = "/login",
) -> GateDecision:
    """Admit or redirect. Presence only; validity is the API's business."""
    public = is_public(path, public_paths)
    if public and has_access_credential:
        return Redirect(landing_path)
    if not public and not has_access_credential:
        return Redirect(login_path)
    return Admit()


__all__ = ["Admit", "GateDecision", "evaluate", "is_public", "is_exempt"]
