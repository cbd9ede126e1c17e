"""
Gunicorn settings for the provisioning admin console.

Every value can be overridden through a GUNICORN_* environment variable.
"""

from __future__ import annotations

import logging
import multiprocessing
import os


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, str(default)))


bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:3000")
wsgi_app = os.environ.get("GUNICORN_APP", "provadmin.wsgi:app")
proc_name = os.environ.get("GUNICORN_PROC_NAME", "provadmin")

# Requests spend most of their time waiting on the provisioning API.
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
workers = _env_int("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1)
threads = _env_int("GUNICORN_THREADS", 4)
max_requests = _env_int("GUNICORN_MAX_REQUESTS", 5000)
max_requests_jitter = _env_int("GUNICORN_MAX_REQUESTS_JITTER", 500)

timeout = _env_int("GUNICORN_TIMEOUT", 60)
graceful_timeout = _env_int("GUNICORN_GRACEFUL_TIMEOUT", 30)
keepalive = _env_int("GUNICORN_KEEPALIVE", 5)

# TLS terminates at the proxy; trust its X-Forwarded-* headers.
forwarded_allow_ips = os.environ.get("GUNICORN_FORWARDED_ALLOW_IPS", "*")

accesslog = os.environ.get("GUNICORN_ACCESSLOG", "-")
errorlog = os.environ.get("GUNICORN_ERRORLOG", "-")
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
capture_output = True
# %(r)s is the request line only; cookies and auth headers never reach the log.
access_log_format = os.environ.get(
    "GUNICORN_ACCESS_LOG_FORMAT",
    '{"time": "%(t)s", "remote": "%(h)s", "request": "%(r)s", '
    '"status": %(s)s, "bytes": %(b)s, "duration_us": %(D)s, "pid": %(p)s}',
)

limit_request_line = _env_int("GUNICORN_LIMIT_REQUEST_LINE", 8190)
limit_request_field_size = _env_int("GUNICORN_LIMIT_REQUEST_FIELD_SIZE", 8190)


def when_ready(server):
    logging.getLogger(__name__).info(
        "provadmin listening on %s (%s workers x %s threads)", bind, workers, threads
    )


def worker_abort(worker):
    logging.getLogger(__name__).warning("Worker %s exceeded %ss, aborting", worker.pid, timeout)
