"""
Gunicorn configuration for Shelfkeep
"""
import multiprocessing
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"

# bcrypt verification is CPU bound, keep to sync workers
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() + 1))
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 30

accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
# Authorization headers carry token secrets; never log request headers here
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(L)s'

proc_name = 'shelfkeep'

limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def when_ready(server):
    """Called just after the server is started."""
    server.log.info(f"Shelfkeep is ready. Listening on {bind}")
