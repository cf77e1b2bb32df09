from __future__ import annotations

"""backend/unravel/services/analysis/line_classifier.py

Line-by-line explanation of submitted Python source.

This module maps a single line of text to one beginner-oriented explanation.
The classification is:
- deterministic (same line, same explanation)
- line-local (no knowledge of the surrounding lines or of indentation depth)
- text-based (regex shapes, not an AST; string literals that contain
  operator-like characters are classified by those characters)

Rules are evaluated top to bottom against the stripped line and the first
match wins. Several shapes overlap (an assignment can also contain an
operator or a call), so the order of ``LINE_RULES`` decides the result and
must not be rearranged.
"""

import re
from dataclasses import dataclass
from typing import Callable, Tuple

from unravel.models import LineKind

Predicate = Callable[[str], bool]


@dataclass(frozen=True)
class LineRule:
    """One entry of the ordered rule table."""

    kind: LineKind
    matches: Predicate
    explanation: str


def _regex(pattern: str) -> Predicate:
    compiled = re.compile(pattern)
    return lambda text: compiled.search(text) is not None


def _all(*predicates: Predicate) -> Predicate:
    return lambda text: all(p(text) for p in predicates)


def _not(predicate: Predicate) -> Predicate:
    return lambda text: not predicate(text)


def _exactly(word: str) -> Predicate:
    return lambda text: text == word


_has_group = _regex(r"\[.+\]|\{.+\}|\(.+\)")
_has_colon = _regex(r":")
_has_for_keyword = _regex(r"\bfor\b")
_starts_with_print = _regex(r"^print\b")


def _is_assignment(text: str) -> bool:
    return "=" in text and "==" not in text


FALLBACK_EXPLANATION = (
    "Python statement: performs an operation (expression, access, or call) "
    "that contributes to the program's behavior."
)

LINE_RULES: Tuple[LineRule, ...] = (
    # 1-2) Layout
    LineRule(
        LineKind.BLANK,
        lambda text: not text,
        "Blank line: used to separate logical sections and make the code easier to read.",
    ),
    LineRule(
        LineKind.COMMENT,
        lambda text: text.startswith("#"),
        "Comment: a human-readable note ignored by Python. Comments explain why "
        "something is done, helping future readers.",
    ),
    # 3-5) Definitions
    LineRule(
        LineKind.IMPORT,
        _regex(r"^from\s+\w+|^import\s+\w+"),
        "Import statement: brings in a module or specific functions so you can use "
        "pre-built tools and utilities.",
    ),
    LineRule(
        LineKind.FUNCTION_DEF,
        _regex(r"^def\s+\w+\s*\("),
        "Function definition: declares a named block of reusable logic. Call the "
        "function later to perform that task.",
    ),
    LineRule(
        LineKind.CLASS_DEF,
        _regex(r"^class\s+\w+"),
        "Class definition: creates a blueprint for objects that bundle data "
        "(attributes) and behavior (methods).",
    ),
    # 6-9) Block openers
    LineRule(
        LineKind.FOR_LOOP,
        _regex(r"^for\s+"),
        "For-loop: repeats the indented block for each item in a sequence (list, "
        "range, etc.), useful for iteration.",
    ),
    LineRule(
        LineKind.WHILE_LOOP,
        _regex(r"^while\s+"),
        "While-loop: repeats as long as a condition stays true; be careful to ensure "
        "the condition becomes false eventually.",
    ),
    LineRule(
        LineKind.IF,
        _regex(r"^if\s+"),
        "If statement: checks a condition and runs the following block when the "
        "condition is true (decision-making).",
    ),
    LineRule(
        LineKind.ELIF,
        _regex(r"^elif\s+"),
        "Elif (else-if): an additional condition checked if previous if/elif "
        "branches were false.",
    ),
    LineRule(
        LineKind.ELSE,
        _regex(r"^else\s*:"),
        "Else: fallback branch that runs when none of the preceding conditions "
        "evaluated to true.",
    ),
    LineRule(
        LineKind.EXCEPT,
        _regex(r"^except\b"),
        "Except: catches an error raised inside the try block so the program can "
        "react to it instead of crashing.",
    ),
    LineRule(
        LineKind.TRY,
        _regex(r"^try\s*:"),
        "Exception handling: try/except blocks let you handle errors gracefully "
        "instead of letting the program crash.",
    ),
    LineRule(
        LineKind.FINALLY,
        _regex(r"^finally\s*:"),
        "Finally: this block always runs after try/except, whether or not an error "
        "happened. Good for clean-up work.",
    ),
    # 10-13) Well-known built-ins
    LineRule(
        LineKind.SEQUENCE,
        _regex(r"\b(?:range|enumerate|zip)\s*\("),
        "Sequence generator: range(), enumerate() or zip() produce values one at a "
        "time, typically used to control how many times a loop runs.",
    ),
    LineRule(
        LineKind.INPUT,
        _regex(r"\binput\s*\("),
        "Input: pauses the program and waits for the user to type something. The "
        "typed text is always returned as a string.",
    ),
    LineRule(
        LineKind.LENGTH,
        _regex(r"\blen\s*\("),
        "Length: len() counts the items in a list, the characters in a string, or "
        "the keys in a dictionary.",
    ),
    LineRule(
        LineKind.PRINT,
        _regex(r"^print\s*\("),
        "Print: displays text or values in the console. Useful for results and "
        "simple debugging.",
    ),
    # 14-16) Collections
    LineRule(
        LineKind.LIST_LITERAL,
        _regex(r"^\[.*\]$"),
        "List literal: builds an ordered, changeable collection of values written "
        "between square brackets.",
    ),
    LineRule(
        LineKind.DICT_LITERAL,
        _regex(r"^\{.*\}$"),
        "Dictionary literal: builds a collection written between curly braces; with "
        "key: value pairs it maps each key to a value.",
    ),
    LineRule(
        LineKind.TUPLE_LITERAL,
        _regex(r"^\(.*\)$"),
        "Tuple literal: groups values between parentheses into a fixed, "
        "unchangeable sequence.",
    ),
    LineRule(
        LineKind.COLLECTION,
        _all(_has_group, _has_colon),
        "Collection or mapping: this appears to create or access lists/dicts/tuples "
        "used to store multiple values.",
    ),
    LineRule(
        LineKind.INDEXING,
        _all(_regex(r"[A-Za-z_]\w*\[.*\]"), _not(_has_for_keyword)),
        "Indexing: picks one item out of a list, string, or dictionary by its "
        "position or key. Positions start at 0.",
    ),
    # 17-19) Expressions
    LineRule(
        LineKind.ARITHMETIC,
        _all(_regex(r"[+\-*/%]"), _not(_starts_with_print)),
        "Arithmetic: calculates a new value with math operators such as +, -, *, / "
        "or %.",
    ),
    LineRule(
        LineKind.COMPARISON,
        _regex(r"==|!=|<=|>=|<|>"),
        "Comparison: checks how two values relate (equal, different, bigger, "
        "smaller) and produces True or False.",
    ),
    LineRule(
        LineKind.BOOLEAN,
        _regex(r"\b(?:and|or|not)\b"),
        "Boolean logic: combines or flips True/False values with and, or and not.",
    ),
    # 20) Flow keywords
    LineRule(
        LineKind.PASS,
        _exactly("pass"),
        "Pass: a placeholder that does nothing. Used where Python needs a statement "
        "but there is nothing to do yet.",
    ),
    LineRule(
        LineKind.BREAK,
        _exactly("break"),
        "Break: leaves the nearest loop immediately, skipping any remaining "
        "iterations.",
    ),
    LineRule(
        LineKind.CONTINUE,
        _exactly("continue"),
        "Continue: skips the rest of this loop iteration and jumps to the next one.",
    ),
    # 21-22) Calls
    LineRule(
        LineKind.METHOD_CALL,
        _regex(r"\w+\.\w+\s*\("),
        "Method call: asks an object to perform one of its own operations, written "
        "as object.method(...).",
    ),
    LineRule(
        LineKind.FUNCTION_CALL,
        _regex(r"\w+\s*\(.*\)"),
        "Function call: executes a function (built-in, library, or user-defined) "
        "and may return a value.",
    ),
    # 23-25) Statements
    LineRule(
        LineKind.RETURN_IN_LOOP,
        _all(_regex(r"\breturn\b"), _regex(r"\b(?:for|while)\b")),
        "Return: exits a function and optionally provides a value back to the "
        "caller. The value here is built by a loop expression on the same line.",
    ),
    LineRule(
        LineKind.RETURN,
        _regex(r"\breturn\b"),
        "Return: exits a function and optionally provides a value back to the caller.",
    ),
    LineRule(
        LineKind.ASSIGNMENT,
        _is_assignment,
        "Assignment: stores a value into a variable so you can reuse it later in "
        "the program.",
    ),
    LineRule(
        LineKind.VARIABLE,
        _regex(r"^[A-Za-z_]\w*$"),
        "Variable reference: uses the value currently stored under this name.",
    ),
)

FALLBACK_RULE = LineRule(LineKind.STATEMENT, lambda text: True, FALLBACK_EXPLANATION)


def match_line_rule(line: str | None) -> LineRule:
    """Return the first rule matching ``line``; never fails."""
    text = (line or "").strip()
    for rule in LINE_RULES:
        if rule.matches(text):
            return rule
    return FALLBACK_RULE


def classify_line(line: str | None) -> str:
    """Return the explanation for a single line of source text."""
    return match_line_rule(line).explanation
