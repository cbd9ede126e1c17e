from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit

from conftest import ManualScheduler
from provadmin.core.auth.renewal_monitor import ProactiveRenewalMonitor
from provadmin.core.auth.session_models import Continue, Redirect

EXPIRY = 10_000_000


class RenewSpy:
    def __init__(self, result=Continue(ok=True)):
        self.calls = 0
        self.result = result

    def __call__(self):
        self.calls += 1
        return self.result


def _monitor(expiry, now, renew=None, scheduler=None, **kwargs):
    renew = renew or RenewSpy()
    monitor = ProactiveRenewalMonitor(
        lambda: expiry,
        renew,
        scheduler,
        clock=(scheduler.now if scheduler else (lambda: now)),
        **kwargs,
    )
    return monitor, renew


@pytest.mark.parametrize(
    "remaining_ms, renews",
    [
        (-60_000, False),
        (0, False),
        (1, True),
        (120_000, True),
        (299_999, True),
        (300_000, False),
        (3_600_000, False),
    ],
)
def test_check_renews_only_inside_threshold_window(remaining_ms, renews):
    now = EXPIRY - remaining_ms
    monitor, renew = _monitor(EXPIRY, now)

    result = monitor.check()

    assert renew.calls == (1 if renews else 0)
    assert (result is not None) == renews


def test_check_without_expiry_marker_does_nothing():
    monitor, renew = _monitor(None, 0)
    assert monitor.check() is None
    assert renew.calls == 0


def test_tick_two_minutes_before_expiry_renews_once():
    scheduler = ManualScheduler(start_ms=EXPIRY - 180_000)
    monitor, renew = _monitor(EXPIRY, None, scheduler=scheduler)

    monitor.start()
    assert renew.calls == 1  # mount

    scheduler.advance(60_000)
    assert scheduler.now() == EXPIRY - 120_000
    assert renew.calls == 2


def test_mount_tick_and_focus_all_trigger_checks():
    scheduler = ManualScheduler(start_ms=EXPIRY - 600_000)
    monitor, renew = _monitor(EXPIRY, None, scheduler=scheduler)

    monitor.start()
    assert renew.calls == 0

    scheduler.advance(5 * 60_000)  # remaining exactly at threshold
    assert renew.calls == 0

    scheduler.advance(60_000)
    assert renew.calls == 1

    scheduler.focus()
    assert renew.calls == 2


def test_stop_releases_scheduler_resources():
    scheduler = ManualScheduler(start_ms=EXPIRY - 200_000)
    monitor, renew = _monitor(EXPIRY, None, scheduler=scheduler)

    monitor.start()
    monitor.start()
    assert scheduler.active_intervals == 1
    assert scheduler.focus_listener_count == 1

    monitor.stop()
    assert not monitor.running
    assert scheduler.active_intervals == 0
    assert scheduler.focus_listener_count == 0

    calls = renew.calls
    scheduler.advance(120_000)
    scheduler.focus()
    assert renew.calls == calls


def test_start_requires_a_scheduler():
    monitor, _ = _monitor(EXPIRY, 0)
    with pytest.raises(RuntimeError):
        monitor.start()


def test_redirect_results_reach_the_callback():
    seen = []
    monitor, _ = _monitor(
        EXPIRY,
        EXPIRY - 1_000,
        renew=RenewSpy(Redirect("/login")),
        on_result=seen.append,
    )

    assert monitor.check() == Redirect("/login")
    assert seen == [Redirect("/login")]


def test_custom_threshold_is_respected():
    monitor, renew = _monitor(EXPIRY, EXPIRY - 500_000, threshold_ms=600_000)
    monitor.check()
    assert renew.calls == 1


def test_runtime_module_exports_only_the_monitor_and_its_scheduler_protocol():
    from provadmin.core.auth import renewal_monitor

    assert renewal_monitor.__all__ == ["Scheduler", "ProactiveRenewalMonitor"]
    assert not hasattr(renewal_monitor, "ManualScheduler")
