"""Gunicorn configuration serving the admission webhooks over TLS."""
import os
import sys

from bmo.config import load_settings

_settings = load_settings()

# Gunicorn config variables
bind = f"0.0.0.0:{_settings.webhook_port}"
workers = 2
timeout = 30
worker_class = "sync"
preload_app = False

# The API server only talks to webhooks over HTTPS
_certfile = os.path.join(_settings.webhook_cert_dir, "tls.crt")
_keyfile = os.path.join(_settings.webhook_cert_dir, "tls.key")
if os.path.exists(_certfile) and os.path.exists(_keyfile):
    certfile = _certfile
    keyfile = _keyfile


def post_worker_init(worker):
    """Called just after a worker has initialized the application."""
    app = getattr(worker, "wsgi", None)
    if app and hasattr(app, 'config') and app.config.get('bmo_settings'):
        print(f"[Worker {worker.pid}] Webhook server ready", file=sys.stderr, flush=True)
    else:
        print(f"[Worker {worker.pid}] WARNING: settings not found in app.config", file=sys.stderr, flush=True)
