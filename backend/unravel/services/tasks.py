# backend/unravel/services/tasks.py
from __future__ import annotations

"""
Celery tasks for the playground backend.

Currently provides:
- run_submission_task: analyze and execute submitted source in the background.
"""

from typing import List, Optional

from celery import Task

from unravel import schemas
from unravel.services.celery_app import celery_app
from unravel.services.execution import analyze_and_run
from unravel.services.statsig_client import log_run_event


@celery_app.task(bind=True, name="unravel.services.tasks.run_submission_task")
def run_submission_task(self: Task, source: str, stdin: Optional[List[str]] = None) -> dict:
    """
    Celery task: explain and run one submission.

    This calls unravel.services.execution.analyze_and_run, which will:
    - produce the line-by-line explanations
    - run the source on the worker's default coordinator
    - translate any failure into a FailureInfo with hints

    The return value is the JSON form of schemas.RunResponse.
    """
    records, result = analyze_and_run(source, stdin or [])
    log_run_event(records, result, execution_mode="celery")
    return schemas.RunResponse.from_session(records, result).model_dump(mode="json")
