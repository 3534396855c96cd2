"""gunicorn settings for ``gunicorn -c gunicorn_conf.py webpulse.main:app``.

Reads the same ``PORT`` and ``LOG_LEVEL`` variables as ``webpulse.config``.
``WEB_CONCURRENCY`` overrides the worker count.
"""
import multiprocessing
import os

bind = f"0.0.0.0:{os.getenv('PORT', '3001')}"

# Each worker runs its own event loop and its own connection pool
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Chart rendering runs in a thread pool and can take a few seconds
timeout = 120
graceful_timeout = 30
keepalive = 5

# Trust X-Forwarded-* from the reverse proxy in front of the service
forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

proc_name = "webpulse_api"
