"""Session lifecycle constants."""

from __future__ import annotations

# Lifecycle states derived from the credential cookies
SESSION_STATE_ANONYMOUS = "anonymous"
SESSION_STATE_AUTHENTICATED = "authenticated"
SESSION_STATE_EXPIRED = "expired"

# Cookie names
ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"
SESSION_EXPIRES_AT_COOKIE = "session_expires_at"
USER_DATA_COOKIE = "user_data"

DEFAULT_ACCESS_TTL_SECONDS = 3600
REFRESH_TOKEN_MAX_AGE_SECONDS = 7 * 24 * 60 * 60
USER_DATA_MAX_AGE_SECONDS = REFRESH_TOKEN_MAX_AGE_SECONDS

# Proactive renewal policy
RENEWAL_THRESHOLD_MS = 5 * 60 * 1000
RENEWAL_CHECK_INTERVAL_MS = 60 * 1000

# Surfaces reachable without an access token (prefix match)
PUBLIC_PATHS = ("/login",)
# Requests that never pass through the session gate
GATE_EXEMPT_PREFIXES = ("/static", "/health", "/favicon.ico")

LOGIN_FAILED_MESSAGE = "Invalid username or password"
LOGIN_TRANSPORT_MESSAGE = "An error occurred during login. Please try again."

__all__ = [
    "SESSION_STATE_ANONYMOUS",
    "SESSION_STATE_AUTHENTICATED",
    "SESSION_STATE_EXPIRED",
    "ACCESS_TOKEN_COOKIE",
    "REFRESH_TOKEN_COOKIE",
    "SESSION_EXPIRES_AT_COOKIE",
    "USER_DATA_COOKIE",
    "DEFAULT_ACCESS_TTL_SECONDS",
    "REFRESH_TOKEN_MAX_AGE_SECONDS",
    "USER_DATA_MAX_AGE_SECONDS",
    "RENEWAL_THRESHOLD_MS",
    "RENEWAL_CHECK_INTERVAL_MS",
    "PUBLIC_PATHS",
    "GATE_EXEMPT_PREFIXES",
    "LOGIN_FAILED_MESSAGE",
    "LOGIN_TRANSPORT_MESSAGE",
]
