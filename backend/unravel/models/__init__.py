# backend/unravel/models/__init__.py
from __future__ import annotations

"""
Core domain models for the playground backend.

Nothing here is persisted: every object lives for one analysis run or one
execution run and is discarded wholesale when the next run starts.

It is used by:
- unravel.services.analysis (SourceLine, ExplanationRecord, LineKind)
- unravel.services.diagnostics (ErrorCategory, FailureInfo)
- unravel.services.execution (ExecutionResult, ExecutionStatus)
- unravel.schemas (for type references)

Models:
- SourceLine: one physical line of submitted source
- ExplanationRecord: per-line explanation produced by the line classifier
- FailureInfo: beginner-friendly description of a failed run
- ExecutionResult: captured output (and optional failure) of one run
"""

import enum
from dataclasses import dataclass
from typing import Optional, Tuple


class LineKind(str, enum.Enum):
    BLANK = "BLANK"
    COMMENT = "COMMENT"
    IMPORT = "IMPORT"
    FUNCTION_DEF = "FUNCTION_DEF"
    CLASS_DEF = "CLASS_DEF"
    FOR_LOOP = "FOR_LOOP"
    WHILE_LOOP = "WHILE_LOOP"
    IF = "IF"
    ELIF = "ELIF"
    ELSE = "ELSE"
    EXCEPT = "EXCEPT"
    TRY = "TRY"
    FINALLY = "FINALLY"
    SEQUENCE = "SEQUENCE"
    INPUT = "INPUT"
    LENGTH = "LENGTH"
    PRINT = "PRINT"
    LIST_LITERAL = "LIST_LITERAL"
    DICT_LITERAL = "DICT_LITERAL"
    TUPLE_LITERAL = "TUPLE_LITERAL"
    COLLECTION = "COLLECTION"
    INDEXING = "INDEXING"
    ARITHMETIC = "ARITHMETIC"
    COMPARISON = "COMPARISON"
    BOOLEAN = "BOOLEAN"
    PASS = "PASS"
    BREAK = "BREAK"
    CONTINUE = "CONTINUE"
    METHOD_CALL = "METHOD_CALL"
    FUNCTION_CALL = "FUNCTION_CALL"
    RETURN_IN_LOOP = "RETURN_IN_LOOP"
    RETURN = "RETURN"
    ASSIGNMENT = "ASSIGNMENT"
    VARIABLE = "VARIABLE"
    STATEMENT = "STATEMENT"


class ErrorCategory(str, enum.Enum):
    SYNTAX = "SYNTAX"
    NAME = "NAME"
    TYPE = "TYPE"
    INDEX = "INDEX"
    INDENTATION = "INDENTATION"
    KEY = "KEY"
    VALUE = "VALUE"
    ZERO_DIVISION = "ZERO_DIVISION"
    ATTRIBUTE = "ATTRIBUTE"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    UNEXPECTED = "UNEXPECTED"
    GENERIC_RUNTIME = "GENERIC_RUNTIME"


class ExecutionStatus(str, enum.Enum):
    NOT_READY = "NOT_READY"
    PREPARING = "PREPARING"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"
    FINISHED_WITH_ERRORS = "FINISHED_WITH_ERRORS"
    FAILED = "FAILED"

    @property
    def message(self) -> str:
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    ExecutionStatus.NOT_READY: "Python runtime not loaded yet.",
    ExecutionStatus.PREPARING: "Preparing Python runtime...",
    ExecutionStatus.RUNNING: "Running code in sandbox...",
    ExecutionStatus.FINISHED: "Execution finished.",
    ExecutionStatus.FINISHED_WITH_ERRORS: "Execution finished with errors.",
    ExecutionStatus.FAILED: "Execution failed.",
}


@dataclass(frozen=True)
class SourceLine:
    line_number: int  # 1-based
    text: str


@dataclass(frozen=True)
class ExplanationRecord:
    line_number: int
    text: str
    explanation: str
    kind: LineKind = LineKind.STATEMENT


@dataclass(frozen=True)
class FailureInfo:
    """
    Friendly description of a failed run, derived from the raw failure text.
    """

    raw_message: str
    category: ErrorCategory
    friendly_message: str
    line_number: Optional[int] = None
    hints: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExecutionResult:
    captured_output: str
    failure: Optional[FailureInfo] = None
    status: ExecutionStatus = ExecutionStatus.FINISHED

    @property
    def succeeded(self) -> bool:
        return self.failure is None

