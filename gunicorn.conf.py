"""Gunicorn configuration for the user API.

Settings are read from the environment so the same image runs in every
environment:

    GUNICORN_BIND     (default 0.0.0.0:5000)
    GUNICORN_WORKERS  (default 2)
    GUNICORN_TIMEOUT  (default 30)
"""
import os

wsgi_app = "userapi.flask_app:create_app()"
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:5000")
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "30"))
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()


def post_fork(server, worker):
    """Warn when a multi-worker server runs on the in-memory store."""
    backend = os.environ.get("USER_STORE_BACKEND", "memory").lower()
    if backend == "memory" and workers > 1:
        worker.log.warning(
            "USER_STORE_BACKEND=memory with %d workers: each worker keeps its own users", workers
        )
