from __future__ import annotations

"""backend/unravel/services/diagnostics/error_translator.py

Centralized translation of interpreter failures into beginner-friendly text.

This module looks at the raw failure text of a run (a traceback or a bare
error string) and assigns an ErrorCategory plus a friendly message.

The translation is:
- deterministic (no randomness)
- text-based (substring markers, checked in a fixed priority order because a
  traceback can mention more than one exception name)
- tolerant (unknown text degrades to GENERIC_RUNTIME, it never raises)

Typical friendly messages:
- "Syntax error (Line 3): Python couldn't parse part of your code. ..."
- "Name error (Line 1): 'foo' is not defined. ..."
- "Runtime error: <raw text>"
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from unravel.models import ErrorCategory, FailureInfo
from unravel.services.diagnostics.hints import quick_fix_suggestions

PROGRAM_LINE_PATTERN = re.compile(r'File "<string>", line (\d+)')
ANY_LINE_PATTERN = re.compile(r"line (\d+)")
UNDEFINED_NAME_PATTERN = re.compile(r"NameError: name '(.+?)' is not defined")

UNEXPECTED_FAILURE_MESSAGE = "Unexpected failure while running code."

# (category, marker, template). Order is the priority order.
ERROR_MARKERS: Tuple[Tuple[ErrorCategory, str, str], ...] = (
    (
        ErrorCategory.SYNTAX,
        "SyntaxError",
        "Syntax error{line_info}: Python couldn't parse part of your code. Check "
        "missing colons, parentheses, or indentation.",
    ),
    (
        ErrorCategory.NAME,
        "NameError",
        "Name error{line_info}: a name was used before it was defined.",
    ),
    (
        ErrorCategory.TYPE,
        "TypeError",
        "Type error{line_info}: an operation received a value of the wrong type "
        "(e.g., adding text to a number).",
    ),
    (
        ErrorCategory.INDEX,
        "IndexError",
        "Index error{line_info}: tried to access an item outside a list/string "
        "range. Check lengths and indices.",
    ),
    (
        ErrorCategory.INDENTATION,
        "IndentationError",
        "Indentation error{line_info}: Python relies on indentation to group code. "
        "Use consistent spaces (recommended).",
    ),
    (
        ErrorCategory.KEY,
        "KeyError",
        "Key error{line_info}: you're trying to access a dictionary key that doesn't "
        "exist. Double-check key names.",
    ),
    (
        ErrorCategory.VALUE,
        "ValueError",
        "Value error{line_info}: a function received a value of the right type but "
        "wrong format. Example: converting 'abc' to int.",
    ),
    (
        ErrorCategory.ZERO_DIVISION,
        "ZeroDivisionError",
        "Zero division error{line_info}: you're dividing by zero. Adjust your logic "
        "or check inputs before dividing.",
    ),
    (
        ErrorCategory.ATTRIBUTE,
        "AttributeError",
        "Attribute error{line_info}: you're trying to access an attribute or method "
        "that doesn't exist on this object.",
    ),
    (
        ErrorCategory.FILE_NOT_FOUND,
        "FileNotFoundError",
        "File not found{line_info}: Python couldn't locate the file you're trying "
        "to open.",
    ),
)

UNDEFINED_NAME_TEMPLATE = (
    "Name error{line_info}: '{name}' is not defined. Did you misspell it or forget "
    "to assign it?"
)
GENERIC_RUNTIME_TEMPLATE = "Runtime error{line_info}: {raw}"


@dataclass(frozen=True)
class TranslatedError:
    category: ErrorCategory
    friendly_message: str
    line_number: Optional[int] = None


def _first_int(pattern: re.Pattern[str], text: str) -> Optional[int]:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def extract_program_line(raw: str) -> Optional[int]:
    """Line number of the submitted program mentioned in a traceback, if any."""
    return _first_int(PROGRAM_LINE_PATTERN, raw)


def translate_error(raw: Optional[str]) -> Optional[TranslatedError]:
    """Translate raw failure text into a category and a friendly message.

    Returns None for empty or missing input; any other text yields a result.
    """
    if not raw:
        return None
    text = str(raw)

    line_number = extract_program_line(text)
    line_info = f" (Line {line_number})" if line_number is not None else ""

    for category, marker, template in ERROR_MARKERS:
        if marker not in text:
            continue
        message = template.format(line_info=line_info)
        if category is ErrorCategory.NAME:
            name_match = UNDEFINED_NAME_PATTERN.search(text)
            if name_match:
                message = UNDEFINED_NAME_TEMPLATE.format(
                    line_info=line_info, name=name_match.group(1)
                )
        return TranslatedError(
            category=category,
            friendly_message=message,
            line_number=line_number,
        )

    return TranslatedError(
        category=ErrorCategory.GENERIC_RUNTIME,
        friendly_message=GENERIC_RUNTIME_TEMPLATE.format(line_info=line_info, raw=text),
        line_number=line_number,
    )


def friendly_error_message(raw: Optional[str]) -> Optional[str]:
    translated = translate_error(raw)
    return translated.friendly_message if translated else None


def build_failure_info(raw: Optional[str]) -> FailureInfo:
    """Build the FailureInfo for a submitted program that raised."""
    raw_message = str(raw or "")
    translated = translate_error(raw_message) or TranslatedError(
        category=ErrorCategory.GENERIC_RUNTIME,
        friendly_message=GENERIC_RUNTIME_TEMPLATE.format(
            line_info="", raw="the program stopped without an error message."
        ),
    )
    return FailureInfo(
        raw_message=raw_message,
        category=translated.category,
        friendly_message=translated.friendly_message,
        line_number=translated.line_number,
        hints=tuple(quick_fix_suggestions(translated.friendly_message)),
    )


def unexpected_failure_info(raw: Optional[str]) -> FailureInfo:
    """Build the FailureInfo for a run whose interpreter could not be used."""
    raw_message = str(raw or "")
    return FailureInfo(
        raw_message=raw_message,
        category=ErrorCategory.UNEXPECTED,
        friendly_message=UNEXPECTED_FAILURE_MESSAGE,
        line_number=_first_int(ANY_LINE_PATTERN, raw_message),
        hints=(),
    )
