# backend/unravel/services/celery_app.py
from __future__ import annotations

"""
Celery application configuration for background code execution.

This module defines a single Celery instance:

    celery_app = Celery(...)

It is used by:
- unravel.services.tasks (for task definitions)
- the worker entrypoint via
  `celery -A unravel.services.celery_app.celery_app worker -Q runs --concurrency 1`
"""

from celery import Celery

from unravel.config import get_settings

settings = get_settings()

celery_app = Celery(
    "run_tasks",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["unravel.services.tasks"],
)

celery_app.conf.task_always_eager = settings.celery_task_always_eager
celery_app.conf.task_store_eager_result = settings.celery_task_always_eager

# Route run-related tasks to a dedicated queue
celery_app.conf.task_routes = {
    "unravel.services.tasks.*": {"queue": "runs"},
}
