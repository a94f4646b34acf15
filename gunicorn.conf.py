"""Gunicorn config for deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uploads replace the series in one worker only. Tune via WEB_CONCURRENCY env var.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Timeout: allow up to 60s for large workbook uploads
timeout = 60

# Graceful timeout for shutdown
graceful_timeout = 30

keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"

wsgi_app = "academy_analytics.main:app"
