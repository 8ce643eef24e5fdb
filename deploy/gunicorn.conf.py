"""Gunicorn 生产配置（注册表服务）

用法:
  SAAJ_SOURCE_ROOT=/srv/saaj/src \
  gunicorn --config deploy/gunicorn.conf.py "saaj.web.app:create_app()"
"""

import multiprocessing
import os

# ---------- 网络 ----------
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:3000")

# ---------- 并发 ----------
# 目录只读、每个请求独立的去重集合，worker 间无共享状态
workers = int(os.getenv("GUNICORN_WORKERS", min(multiprocessing.cpu_count() * 2 + 1, 8)))
threads = int(os.getenv("GUNICORN_THREADS", "2"))
worker_class = "gthread"
timeout = 30

# ---------- 日志 ----------
accesslog = os.getenv("GUNICORN_ACCESS_LOG", "-")
errorlog = os.getenv("GUNICORN_ERROR_LOG", "-")
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")

# ---------- 进程管理 ----------
graceful_timeout = 15
keepalive = 5
max_requests = 2000
max_requests_jitter = 100
