from __future__ import annotations

"""backend/unravel/services/diagnostics/hints.py

Quick-fix suggestions for a friendly error message.

Each keyword is checked independently, so a message mentioning several
categories collects the hints of all of them, in table order. Categories
without an entry (key, value, zero division, attribute, file not found)
produce no hints.
"""

from typing import List, Optional, Tuple

QUICK_FIX_HINTS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    (
        "Syntax error",
        (
            "Check for missing ':' at the end of control lines (if/for/while/def/class).",
            "Ensure parentheses and quotes are balanced and indents match.",
        ),
    ),
    (
        "Name error",
        (
            "Check spelling of variable/function names and define them before use.",
            "Make sure you imported the module that provides the name, if needed.",
        ),
    ),
    (
        "Indentation error",
        ("Use 4 spaces per indent level and avoid mixing tabs and spaces.",),
    ),
    (
        "Type error",
        ("Print values and their types with type(x) to diagnose incorrect types.",),
    ),
    (
        "Index error",
        ("Verify list/string lengths and ensure indices are within range.",),
    ),
)


def quick_fix_suggestions(friendly: Optional[str]) -> List[str]:
    if not friendly:
        return []
    suggestions: List[str] = []
    for keyword, hints in QUICK_FIX_HINTS:
        if keyword in friendly:
            suggestions.extend(hints)
    return suggestions
