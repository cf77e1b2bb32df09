from __future__ import annotations

"""backend/unravel/services/analysis/orchestrator.py

Whole-program analysis: split submitted source into lines and explain each.

Every physical line yields exactly one record, including empty lines produced
by consecutive line breaks or by a trailing newline, so the record count is
always ``len(source.split("\\n"))``.
"""

from typing import List

from unravel.models import ExplanationRecord, SourceLine
from unravel.services.analysis.line_classifier import match_line_rule

LINE_BREAK = "\n"


def split_source_lines(source: str | None) -> List[SourceLine]:
    return [
        SourceLine(line_number=index, text=text)
        for index, text in enumerate((source or "").split(LINE_BREAK), start=1)
    ]


def explain_source_line(line: SourceLine) -> ExplanationRecord:
    rule = match_line_rule(line.text)
    return ExplanationRecord(
        line_number=line.line_number,
        text=line.text,
        explanation=rule.explanation,
        kind=rule.kind,
    )


def produce_line_explanations(source: str | None) -> List[ExplanationRecord]:
    """Explain ``source`` line by line, numbering lines from 1."""
    return [explain_source_line(line) for line in split_source_lines(source)]
