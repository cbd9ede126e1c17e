import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from provadmin import create_app
from provadmin.core.auth.schemas import LoginResponse, RefreshResponse
from provadmin.core.auth.session_context import AUTH_SERVICE_EXTENSION


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (Flask app + faked remote API)")


# ==================== Fakes ====================


class FakeAuthService:
    """Stands in for AuthServiceClient; records every call."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.login_error = None
        self.refresh_error = None
        self.logout_error = None
        self.access_token = "access-1"
        self.refresh_token = "refresh-1"
        self.renewed_token = "access-2"
        self.expires_in = 3600
        self.user = {"id": "42", "username": "operator"}

    def login(self, username, password):
        self.calls.append(("login", username, password))
        if self.login_error is not None:
            raise self.login_error
        return LoginResponse(
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            expires_in=self.expires_in,
            user=self.user,
        )

    def refresh(self, refresh_token):
        self.calls.append(("refresh", refresh_token))
        if self.refresh_error is not None:
            raise self.refresh_error
        return RefreshResponse(access_token=self.renewed_token, expires_in=self.expires_in)

    def logout(self, access_token, refresh_token):
        self.calls.append(("logout", access_token, refresh_token))
        if self.logout_error is not None:
            raise self.logout_error

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None, reason: str = "OK"):
        self.status_code = status_code
        self._body = body
        self.reason = reason
        self.content = b"" if body is None else b"{}"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


class FakeHttpSession:
    """Minimal requests.Session replacement: queued responses, recorded requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[dict] = []
        self.error = None

    def request(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        if not self.responses:
            return FakeResponse(200, {})
        return self.responses.pop(0)

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)


class ManualScheduler:
    """Deterministic single-threaded scheduler driven by ``advance`` and ``focus``."""

    def __init__(self, start_ms: int = 0):
        self.current_ms = start_ms
        self._next_handle = 1
        # handle -> [interval_ms, callback, next_due_ms]
        self._intervals: dict[int, list] = {}
        self._focus_listeners: list[Callable[[], None]] = []

    def now(self) -> int:
        return self.current_ms

    def set_interval(self, interval_ms: int, callback: Callable[[], None]) -> int:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = self._next_handle
        self._next_handle += 1
        self._intervals[handle] = [interval_ms, callback, self.current_ms + interval_ms]
        return handle

    def clear_interval(self, handle: int) -> None:
        self._intervals.pop(handle, None)

    def add_focus_listener(self, callback: Callable[[], None]) -> None:
        self._focus_listeners.append(callback)

    def remove_focus_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._focus_listeners:
            self._focus_listeners.remove(callback)

    @property
    def active_intervals(self) -> int:
        return len(self._intervals)

    @property
    def focus_listener_count(self) -> int:
        return len(self._focus_listeners)

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due interval callbacks in time order."""
        target = self.current_ms + ms
        while True:
            due = [(entry[2], handle) for handle, entry in self._intervals.items() if entry[2] <= target]
            if not due:
                break
            due_at, handle = min(due)
            entry = self._intervals[handle]
            self.current_ms = due_at
            entry[2] = due_at + entry[0]
            entry[1]()
        self.current_ms = target

    def focus(self) -> None:
        for callback in list(self._focus_listeners):
            callback()


# ==================== Fixtures ====================


@pytest.fixture()
def auth_service():
    return FakeAuthService()


@pytest.fixture()
def provisioning_http():
    return FakeHttpSession()


@pytest.fixture()
def app(auth_service, provisioning_http):
    app = create_app("testing")
    app.extensions[AUTH_SERVICE_EXTENSION] = auth_service
    app.extensions["provisioning_http"] = provisioning_http
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


