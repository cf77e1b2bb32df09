# backend/unravel/services/reports/markdown_builder.py
from __future__ import annotations

"""
Markdown report generation for a playground session.

This module is deliberately pure and side-effect free: it takes the
submitted source, its explanation records and the execution result and
returns a markdown string.

It does **not** hit the filesystem or external services.
"""

from collections import Counter
from typing import Iterable, List

from unravel.models import ExecutionResult, ExplanationRecord


def _build_kind_counts(records: Iterable[ExplanationRecord]) -> dict[str, int]:
    counter: Counter[str] = Counter()
    for record in records:
        counter[record.kind.value] += 1
    return dict(counter)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def build_session_markdown(
    *,
    source: str,
    records: List[ExplanationRecord],
    result: ExecutionResult | None = None,
) -> str:
    """
    Build a markdown report for one analysis (and optional run) of ``source``.
    """
    lines: list[str] = []

    # Header
    lines.append("# Unravel Report")
    lines.append("")
    lines.append(f"**Lines:** {len(records)}")
    if result is not None:
        lines.append(f"**Status:** `{result.status.value}`")
    lines.append("")

    lines.append("## Source")
    lines.append("")
    lines.append("```python")
    lines.append(source.rstrip("\n"))
    lines.append("```")
    lines.append("")

    # Summary
    kind_counts = _build_kind_counts(records)
    if kind_counts:
        lines.append("## Summary")
        lines.append("")
        for kind, count in sorted(kind_counts.items(), key=lambda t: t[0]):
            lines.append(f"- {kind}: {count}")
        lines.append("")

    if result is not None:
        lines.append("## Output")
        lines.append("")
        lines.append("```text")
        lines.append(result.captured_output or "(no output)")
        lines.append("```")
        lines.append("")

        lines.append("## Error / Hints")
        lines.append("")
        failure = result.failure
        if failure is None:
            lines.append("_No errors detected._")
        else:
            lines.append(f"**{failure.friendly_message}**")
            lines.append("")
            lines.append(f"- **Category:** `{failure.category.value}`")
            if failure.line_number is not None:
                lines.append(f"- **Line:** {failure.line_number}")
            if failure.hints:
                lines.append("")
                lines.append("Suggested fixes:")
                lines.append("")
                for hint in failure.hints:
                    lines.append(f"1. {hint}")
            if failure.raw_message:
                lines.append("")
                lines.append("<details>")
                lines.append("<summary>Raw error</summary>")
                lines.append("")
                lines.append("```text")
                lines.append(failure.raw_message)
                lines.append("```")
                lines.append("</details>")
        lines.append("")

    lines.append("## Line-by-line explanation")
    lines.append("")
    if not records:
        lines.append("_No analysis yet._")
        return "\n".join(lines)

    highlight = result.failure.line_number if result and result.failure else None
    lines.append("| Line | Code | Explanation |")
    lines.append("|------|------|-------------|")
    for record in records:
        marker = " (error)" if record.line_number == highlight else ""
        code = f"`{_escape_cell(record.text)}`" if record.text.strip() else "(blank)"
        lines.append(
            f"| {record.line_number}{marker} | {code} | {_escape_cell(record.explanation)} |"
        )

    return "\n".join(lines)
