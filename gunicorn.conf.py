"""
Acme Dashboard - Gunicorn WSGI Server Configuration

Serves acme.wsgi:application behind a TLS-terminating proxy.
Worker count, threads and restart cycles are tunable from the environment.
"""

import logging
import multiprocessing
import os

IS_PRODUCTION = os.getenv("PRODUCTION") == "true"

logging.basicConfig(
    level=logging.INFO if IS_PRODUCTION else logging.DEBUG,
    format='[%(asctime)s] %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# =============================================================================
# SERVER BINDING
# =============================================================================

PORT = int(os.getenv("PORT", 8000))
bind = [f"0.0.0.0:{PORT}"]
wsgi_app = "acme.wsgi:application"


# =============================================================================
# WORKERS
# =============================================================================

def calculate_workers():
    cpu_count = multiprocessing.cpu_count()
    if IS_PRODUCTION:
        return max(2, min(cpu_count + 1, 7))
    return min((cpu_count * 2) + 1, 17)


workers = int(os.getenv("WEB_CONCURRENCY", calculate_workers()))
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", 4))

# Restart workers after N requests; 0 disables
max_requests = int(os.getenv("GUNICORN_MAX_REQUESTS", 1000))
max_requests_jitter = int(os.getenv("GUNICORN_MAX_REQUESTS_JITTER", 100))


# =============================================================================
# TIMEOUTS & LIMITS
# =============================================================================

timeout = 120
graceful_timeout = int(os.getenv("GUNICORN_GRACEFUL_TIMEOUT", 10))
keepalive = 5

limit_request_line = 8190
limit_request_fields = 100
limit_request_field_size = 8190

preload_app = True
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "*")

if IS_PRODUCTION:
    secure_scheme_headers = {
        "X-FORWARDED-PROTO": "https",
    }


# =============================================================================
# LOGGING
# =============================================================================

accesslog = "-"
errorlog = "-"
loglevel = "info" if IS_PRODUCTION else "debug"
capture_output = True

access_log_format = (
    '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s '
    '"%(f)s" "%(a)s" response_time=%(D)s_us worker_id=%(p)s'
)

proc_name = "acme-dashboard"


# =============================================================================
# HOOKS
# =============================================================================

def when_ready(server):
    logger.info(f"Gunicorn ready at {server.address} with {workers} workers")


def post_fork(server, worker):
    """Pre-warm the worker's database connection so the first request is not slow."""
    try:
        import django
        django.setup()
        from django.db import connection
        connection.ensure_connection()
        logger.info(f"Worker {worker.pid}: Database connection pre-warmed")
    except Exception as e:
        logger.warning(f"Worker {worker.pid}: Failed to pre-warm DB connection: {e}")


def on_exit(server):
    logger.info("Gunicorn shutting down")
