"""
Gunicorn configuration for the development panel API.

Env vars that override defaults:
  PORT       TCP port to bind (Railway sets this automatically)
  WORKERS    number of worker processes (default: 2)
  LOG_LEVEL  gunicorn log level (default: info)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Scoring is CPU-only and stateless; workers share nothing.
workers = int(os.environ.get("WORKERS", "2"))

wsgi_app = "devpanel.main:app"

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Kill a worker that hasn't responded in 60 s.
timeout = 60

# Stdout only (Railway / Render capture it automatically).
loglevel = os.environ.get("LOG_LEVEL", "info")
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
