# backend/unravel/api/runs.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from unravel import schemas
from unravel.services.execution import (
    ExecutionCoordinator,
    analyze_and_run,
    get_default_coordinator,
)
from unravel.services.statsig_client import log_run_event

router = APIRouter(prefix="/runs", tags=["runs"])


def _run_inline(
    payload: schemas.RunRequest,
    coordinator: ExecutionCoordinator,
) -> schemas.RunResponse:
    records, result = analyze_and_run(payload.source, payload.stdin, coordinator=coordinator)
    log_run_event(records, result)
    return schemas.RunResponse.from_session(records, result)


def _dispatch_run(
    payload: schemas.RunRequest,
    coordinator: ExecutionCoordinator,
) -> schemas.RunJobRead:
    """Kick off a run via Celery, with a synchronous fallback."""

    try:
        from unravel.services.tasks import run_submission_task

        async_result = run_submission_task.delay(payload.source, payload.stdin)
        job = schemas.RunJobRead(
            job_id=async_result.id,
            execution_mode="celery",
            state=async_result.state,
        )
        if async_result.ready() and async_result.successful():
            job.response = schemas.RunResponse.model_validate(async_result.result)
        return job
    except Exception as exc:  # noqa: BLE001
        dispatch_error = str(exc)

    return schemas.RunJobRead(
        execution_mode="inline",
        state="SUCCESS",
        dispatch_error=dispatch_error,
        response=_run_inline(payload, coordinator),
    )


@router.post("", response_model=schemas.RunResponse)
def analyze_and_run_source(
    payload: schemas.RunRequest,
    coordinator: ExecutionCoordinator = Depends(get_default_coordinator),
) -> schemas.RunResponse:
    """
    "Analyze & Run": explain every line, then execute the source.

    Failures of the submitted program (and of the interpreter itself) are
    reported inside the response; this endpoint does not turn them into HTTP
    errors.
    """
    return _run_inline(payload, coordinator)


@router.post("/jobs", response_model=schemas.RunJobRead)
def start_run_job(
    payload: schemas.RunRequest,
    coordinator: ExecutionCoordinator = Depends(get_default_coordinator),
) -> schemas.RunJobRead:
    return _dispatch_run(payload, coordinator)


@router.get("/jobs/{job_id}", response_model=schemas.RunJobRead)
def get_run_job(job_id: str) -> schemas.RunJobRead:
    from unravel.services.celery_app import celery_app

    async_result = celery_app.AsyncResult(job_id)
    job = schemas.RunJobRead(
        job_id=job_id,
        execution_mode="celery",
        state=async_result.state,
    )
    if async_result.successful():
        job.response = schemas.RunResponse.model_validate(async_result.result)
    return job
