from __future__ import annotations

"""
Diagnostics and error translation utilities.

This package currently provides:
- error_translator: turn raw interpreter failure text into a stable
  ErrorCategory, a beginner-friendly message and a best-effort line number
- hints: ordered quick-fix suggestions for a friendly message

The goal is to keep error handling logic centralized and deterministic.
"""

from .error_translator import (  # noqa: F401
    TranslatedError,
    build_failure_info,
    friendly_error_message,
    translate_error,
    unexpected_failure_info,
)
from .hints import quick_fix_suggestions  # noqa: F401
