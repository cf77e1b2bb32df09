import pytest

from unravel.models import LineKind
from unravel.services.analysis import LINE_RULES, classify_line, match_line_rule
from unravel.services.analysis.line_classifier import FALLBACK_EXPLANATION


def _explanation(kind: LineKind) -> str:
    return next(rule.explanation for rule in LINE_RULES if rule.kind is kind)


@pytest.mark.parametrize(
    "line, kind",
    [
        ("", LineKind.BLANK),
        ("   ", LineKind.BLANK),
        ("\t", LineKind.BLANK),
        ("# note", LineKind.COMMENT),
        ("    # indented note", LineKind.COMMENT),
        ("import math", LineKind.IMPORT),
        ("from os import path", LineKind.IMPORT),
        ("def greet(name):", LineKind.FUNCTION_DEF),
        ("class Dog(Animal):", LineKind.CLASS_DEF),
        ("class Dog:", LineKind.CLASS_DEF),
        ("for i in range(3):", LineKind.FOR_LOOP),
        ("while count < 10:", LineKind.WHILE_LOOP),
        ("if x > 3:", LineKind.IF),
        ("elif x == 2:", LineKind.ELIF),
        ("else:", LineKind.ELSE),
        ("except ValueError as exc:", LineKind.EXCEPT),
        ("except:", LineKind.EXCEPT),
        ("try:", LineKind.TRY),
        ("finally:", LineKind.FINALLY),
        ("numbers = list(range(10))", LineKind.SEQUENCE),
        ("pairs = zip(a, b)", LineKind.SEQUENCE),
        ("name = input('Name: ')", LineKind.INPUT),
        ("size = len(items)", LineKind.LENGTH),
        ("print('hello')", LineKind.PRINT),
        ("    print(i)", LineKind.PRINT),
        ("[1, 2, 3]", LineKind.LIST_LITERAL),
        ("{'a': 1}", LineKind.DICT_LITERAL),
        ("(1, 2)", LineKind.TUPLE_LITERAL),
        ("ages = {'bob': 3}", LineKind.COLLECTION),
        ("first = items[0]", LineKind.INDEXING),
        ("total += price", LineKind.ARITHMETIC),
        ("x == 5", LineKind.COMPARISON),
        ("x != y", LineKind.COMPARISON),
        ("ready and willing", LineKind.BOOLEAN),
        ("pass", LineKind.PASS),
        ("break", LineKind.BREAK),
        ("continue", LineKind.CONTINUE),
        ("text.upper()", LineKind.METHOD_CALL),
        ("greet('Bob')", LineKind.FUNCTION_CALL),
        ("main()", LineKind.FUNCTION_CALL),
        ("return result", LineKind.RETURN),
        ("return", LineKind.RETURN),
        ("x = 5", LineKind.ASSIGNMENT),
        ("answer", LineKind.VARIABLE),
        ("@property", LineKind.STATEMENT),
    ],
)
def test_line_kinds(line, kind):
    assert match_line_rule(line).kind is kind


def test_blank_lines_share_one_explanation():
    assert classify_line("") == classify_line("   ") == _explanation(LineKind.BLANK)


def test_comment_and_assignment_explanations():
    assert classify_line("# note").startswith("Comment:")
    assert classify_line("x = 5").startswith("Assignment:")


def test_equality_is_never_an_assignment():
    explanation = classify_line("x == 5")
    assert explanation != _explanation(LineKind.ASSIGNMENT)
    assert explanation == _explanation(LineKind.COMPARISON)


def test_for_loop_wins_over_range_detection():
    assert classify_line("for i in range(3):") == _explanation(LineKind.FOR_LOOP)


def test_literal_list_wins_over_collection_with_colon():
    assert match_line_rule("[x[1:3]]").kind is LineKind.LIST_LITERAL


def test_arithmetic_precedes_assignment():
    assert match_line_rule("y = x + 1").kind is LineKind.ARITHMETIC


def test_string_literals_with_operators_keep_heuristic_result():
    assert match_line_rule('label = "a+b"').kind is LineKind.ARITHMETIC


def test_indexing_inside_comprehension_is_not_indexing():
    assert match_line_rule("firsts = row[0] for row in rows").kind is not LineKind.INDEXING


def test_return_inside_loop_expression():
    rule = match_line_rule("return [x for x in items]")
    assert rule.kind is LineKind.RETURN_IN_LOOP
    assert rule.explanation.startswith("Return:")


def test_multiline_constructs_are_classified_independently():
    assert match_line_rule("def add(a,").kind is LineKind.FUNCTION_DEF
    assert match_line_rule("        b):").kind is LineKind.STATEMENT


def test_unknown_line_falls_back():
    assert classify_line("del items") == FALLBACK_EXPLANATION
    assert classify_line("@decorator") == FALLBACK_EXPLANATION


@pytest.mark.parametrize(
    "line",
    ["", None, "???", "x" * 5000, "\x00", "'''", "lambda: 0", "é = 1"],
)
def test_always_returns_non_empty_text(line):
    explanation = classify_line(line)
    assert isinstance(explanation, str)
    assert explanation


def test_classification_is_idempotent():
    line = "for name in names:"
    assert classify_line(line) == classify_line(line)
