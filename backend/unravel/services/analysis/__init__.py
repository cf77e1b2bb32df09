from __future__ import annotations

"""
Source analysis package.

This package provides:
- line_classifier: ordered rule table mapping one line of text to a
  beginner-oriented explanation
- orchestrator: splits a whole submission into lines and explains each

Both are pure functions with no state carried between calls.
"""

from .line_classifier import LINE_RULES, LineRule, classify_line, match_line_rule  # noqa: F401
from .orchestrator import produce_line_explanations, split_source_lines  # noqa: F401
