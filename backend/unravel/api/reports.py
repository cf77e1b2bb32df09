# backend/unravel/api/reports.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse
from starlette.background import BackgroundTask

from unravel import schemas
from unravel.config import get_settings
from unravel.services.execution import (
    ExecutionCoordinator,
    analyze_and_run,
    get_default_coordinator,
)
from unravel.services.reports import build_session_markdown, export_session_pdf

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/markdown", response_class=PlainTextResponse)
def markdown_report(
    payload: schemas.RunRequest,
    coordinator: ExecutionCoordinator = Depends(get_default_coordinator),
) -> PlainTextResponse:
    records, result = analyze_and_run(payload.source, payload.stdin, coordinator=coordinator)
    markdown = build_session_markdown(source=payload.source, records=records, result=result)
    return PlainTextResponse(markdown, media_type="text/markdown")


@router.post("/pdf", response_class=FileResponse)
def pdf_report(
    payload: schemas.RunRequest,
    coordinator: ExecutionCoordinator = Depends(get_default_coordinator),
) -> FileResponse:
    records, result = analyze_and_run(payload.source, payload.stdin, coordinator=coordinator)
    pdf_path = export_session_pdf(
        source=payload.source,
        records=records,
        result=result,
        output_dir=get_settings().reports_dir,
    )
    # Reports are not kept once sent
    return FileResponse(
        pdf_path,
        media_type="application/pdf",
        filename="unravel-report.pdf",
        background=BackgroundTask(pdf_path.unlink, missing_ok=True),
    )
