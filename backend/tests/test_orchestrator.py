import pytest

from unravel.models import LineKind
from unravel.services.analysis import produce_line_explanations, split_source_lines


def test_trailing_newline_keeps_trailing_empty_line():
    records = produce_line_explanations("a=1\nb=2\n")

    assert [r.line_number for r in records] == [1, 2, 3]
    assert [r.text for r in records] == ["a=1", "b=2", ""]
    assert records[-1].kind is LineKind.BLANK


@pytest.mark.parametrize(
    "source",
    ["", "x = 1", "x = 1\n", "\n\n\n", "a\n\nb", "# Example:\nfor i in range(3):\n    print(i)\n"],
)
def test_one_record_per_line(source):
    assert len(produce_line_explanations(source)) == len(source.split("\n"))


def test_empty_source_yields_one_blank_record():
    records = produce_line_explanations("")
    assert len(records) == 1
    assert records[0].line_number == 1
    assert records[0].kind is LineKind.BLANK


def test_records_keep_raw_text_and_document_order():
    source = "# Example:\nfor i in range(3):\n    print(i)\n"
    records = produce_line_explanations(source)

    assert [r.kind for r in records] == [
        LineKind.COMMENT,
        LineKind.FOR_LOOP,
        LineKind.PRINT,
        LineKind.BLANK,
    ]
    assert records[2].text == "    print(i)"


def test_split_source_lines_numbers_from_one():
    lines = split_source_lines("first\nsecond")
    assert [(line.line_number, line.text) for line in lines] == [(1, "first"), (2, "second")]
