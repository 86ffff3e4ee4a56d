# gunicorn.conf.py
import multiprocessing, os

wsgi_app = "urania.main:app"
bind = f"0.0.0.0:{os.getenv('PORT','5000')}"
workers = max(2, multiprocessing.cpu_count())  # pure CPU math, no shared state
threads = 1
worker_class = "sync"
timeout = 30
graceful_timeout = 10
keepalive = 2
accesslog = "-"   # stdout
errorlog = "-"    # stderr
loglevel = os.getenv("URANIA_LOG_LEVEL", "info").lower()

access_log_format = (
    '%(h)s - "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" '
    'req_id:%({X-Request-ID}i)s rt:%(L)s'
)
