"""Proactive access-token renewal.

The monitor reads the client-visible expiry marker and asks the lifecycle
controller to renew shortly before the access token runs out, so an expired
token never has to be discovered through a failed API call.

Checks are triggered on start (mount), on every interval tick and whenever the
surface regains focus. Triggers may overlap and a check never waits for an
outstanding renewal; duplicate renewals are harmless because renewal is
idempotent.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from provadmin.core.auth.constants import RENEWAL_CHECK_INTERVAL_MS, RENEWAL_THRESHOLD_MS
from provadmin.core.auth.session_models import LifecycleResult, now_ms

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Timer and focus-event source the monitor is driven by."""

    def set_interval(self, interval_ms: int, callback: Callable[[], None]) -> Any: ...

    def clear_interval(self, handle: Any) -> None: ...

    def add_focus_listener(self, callback: Callable[[], None]) -> None: ...

    def remove_focus_listener(self, callback: Callable[[], None]) -> None: ...


class ProactiveRenewalMonitor:
    def __init__(
        self,
        read_expiry: Callable[[], Optional[int]],
        renew: Callable[[], LifecycleResult],
        scheduler: Optional[Scheduler] = None,
        *,
        clock: Callable[[], int] = now_ms,
        threshold_ms: int = RENEWAL_THRESHOLD_MS,
        interval_ms: int = RENEWAL_CHECK_INTERVAL_MS,
        on_result: Optional[Callable[[LifecycleResult], None]] = None,
    ):
        self.read_expiry = read_expiry
        self.renew = renew
        self.scheduler = scheduler
        self.clock = clock
        self.threshold_ms = threshold_ms
        self.interval_ms = interval_ms
        self.on_result = on_result
        self._interval_handle: Any = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def should_renew(self, expiry_marker: Optional[int], now: int) -> bool:
        if expiry_marker is None:
            return False
        time_until_expiry = expiry_marker - now
        # Already expired is left to the gate / next API call.
        return 0 < time_until_expiry < self.threshold_ms

    def check(self) -> Optional[LifecycleResult]:
        """Run one check; returns the renewal result when a renewal was issued."""
        if not self.should_renew(self.read_expiry(), self.clock()):
            return None
        logger.debug("Access token close to expiry; renewing")
        result = self.renew()
        if self.on_result is not None:
            self.on_result(result)
        return result

    def start(self) -> None:
        if self._running:
            return
        if self.scheduler is None:
            raise RuntimeError("a scheduler is required to start the monitor")
        self._running = True
        self.check()
        self._interval_handle = self.scheduler.set_interval(self.interval_ms, self._on_trigger)
        self.scheduler.add_focus_listener(self._on_trigger)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self.scheduler.clear_interval(self._interval_handle)
        self.scheduler.remove_focus_listener(self._on_trigger)
        self._interval_handle = None

    def _on_trigger(self) -> None:
        self.check()


__all__ = ["Scheduler", "ProactiveRenewalMonitor"]
