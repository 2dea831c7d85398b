# gunicorn.conf.py
import os

bind = f"0.0.0.0:{os.getenv('PORT', '3001')}"
workers = int(os.getenv("WEB_CONCURRENCY", "2"))  # scale via env
threads = int(os.getenv("WEB_THREADS", "4"))
worker_class = "uvicorn.workers.UvicornWorker"
preload_app = False
timeout = 60
graceful_timeout = 30
keepalive = 5
max_requests = 1000
max_requests_jitter = 100
accesslog = "-"
errorlog = "-"
loglevel = "info"
