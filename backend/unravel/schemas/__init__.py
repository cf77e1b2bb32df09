# backend/unravel/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for request/response models.

This module is the API contract layer and depends on:
- unravel.models (LineKind, ErrorCategory, ExecutionStatus and the
  dataclasses that responses are read from)

It is used by:
- API routes
- Celery tasks, which return RunResponse.model_dump(mode="json")
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from unravel.models import (
    ErrorCategory,
    ExecutionResult,
    ExecutionStatus,
    ExplanationRecord,
    LineKind,
)


# ---------- Explanation Schemas ----------


class LineRequest(BaseModel):
    line: str = ""


class LineExplanation(BaseModel):
    line: str
    explanation: str
    kind: LineKind


class SourceRequest(BaseModel):
    source: str = ""


class ExplanationRecordRead(BaseModel):
    line_number: int
    text: str
    explanation: str
    kind: LineKind

    model_config = ConfigDict(from_attributes=True)


# ---------- Run Schemas ----------


class RunRequest(SourceRequest):
    """
    Source to analyze and run.

    stdin holds the answers for input() prompts, consumed in order; prompts
    past the end receive an empty string.
    """

    stdin: List[str] = Field(default_factory=list)


class FailureInfoRead(BaseModel):
    raw_message: str
    category: ErrorCategory
    friendly_message: str
    line_number: Optional[int]
    hints: List[str]

    model_config = ConfigDict(from_attributes=True)


class ExecutionResultRead(BaseModel):
    captured_output: str
    failure: Optional[FailureInfoRead]
    status: ExecutionStatus

    model_config = ConfigDict(from_attributes=True)


class RunResponse(BaseModel):
    explanations: List[ExplanationRecordRead]
    result: ExecutionResultRead
    status_message: str
    highlight_line: Optional[int] = None

    @classmethod
    def from_session(
        cls,
        records: List[ExplanationRecord],
        result: ExecutionResult,
    ) -> "RunResponse":
        return cls(
            explanations=[ExplanationRecordRead.model_validate(r) for r in records],
            result=ExecutionResultRead.model_validate(result),
            status_message=result.status.message,
            highlight_line=result.failure.line_number if result.failure else None,
        )


# ---------- Background Job Schemas ----------


class RunJobRead(BaseModel):
    job_id: Optional[str] = None
    execution_mode: str
    state: Optional[str] = None
    dispatch_error: Optional[str] = None
    response: Optional[RunResponse] = None


# ---------- Misc ----------


class ExampleRead(BaseModel):
    source: str
