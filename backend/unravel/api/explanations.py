# backend/unravel/api/explanations.py
from __future__ import annotations

from fastapi import APIRouter

from unravel import schemas
from unravel.services.analysis import match_line_rule, produce_line_explanations
from unravel.services.statsig_client import log_explanation_event

router = APIRouter(prefix="/explanations", tags=["explanations"])


@router.post("/line", response_model=schemas.LineExplanation)
def explain_line(payload: schemas.LineRequest) -> schemas.LineExplanation:
    rule = match_line_rule(payload.line)
    return schemas.LineExplanation(
        line=payload.line,
        explanation=rule.explanation,
        kind=rule.kind,
    )


@router.post("", response_model=list[schemas.ExplanationRecordRead])
def explain_source(payload: schemas.SourceRequest) -> list[schemas.ExplanationRecordRead]:
    """
    Line-by-line explanation of a whole submission.

    One record per line of ``payload.source``, trailing empty line included.
    """
    records = produce_line_explanations(payload.source)
    log_explanation_event(records)
    return [schemas.ExplanationRecordRead.model_validate(r) for r in records]
