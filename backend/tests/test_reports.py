from unravel.models import ErrorCategory, ExecutionResult, ExecutionStatus, FailureInfo
from unravel.services.analysis import produce_line_explanations
from unravel.services.reports import build_session_markdown, export_session_pdf


def _failed_result():
    return ExecutionResult(
        captured_output="(no output due to error)",
        failure=FailureInfo(
            raw_message="KeyError: 'age'",
            category=ErrorCategory.KEY,
            friendly_message="Key error (Line 2): you're trying to access a dictionary key that doesn't exist.",
            line_number=2,
        ),
        status=ExecutionStatus.FINISHED_WITH_ERRORS,
    )


def test_markdown_without_run_has_only_analysis():
    source = "x = 1\n"
    markdown = build_session_markdown(source=source, records=produce_line_explanations(source))

    assert "## Source" in markdown
    assert "## Output" not in markdown
    assert "| 1 | `x = 1` |" in markdown
    assert "| 2 | (blank) |" in markdown


def test_markdown_marks_failure_line_and_lists_details():
    source = "person = {}\nprint(person['age'])\n"
    markdown = build_session_markdown(
        source=source,
        records=produce_line_explanations(source),
        result=_failed_result(),
    )

    assert "**Status:** `FINISHED_WITH_ERRORS`" in markdown
    assert "- **Category:** `KEY`" in markdown
    assert "- **Line:** 2" in markdown
    assert "| 2 (error) |" in markdown
    assert "KeyError: 'age'" in markdown


def test_markdown_escapes_table_pipes():
    source = "flags = a | b"
    markdown = build_session_markdown(source=source, records=produce_line_explanations(source))
    assert "`flags = a \\| b`" in markdown


def test_markdown_successful_run():
    source = "print('ok')"
    markdown = build_session_markdown(
        source=source,
        records=produce_line_explanations(source),
        result=ExecutionResult(captured_output="ok"),
    )
    assert "_No errors detected._" in markdown
    assert "```text\nok\n```" in markdown


def test_export_session_pdf(tmp_path):
    source = "print('ok')"
    pdf_path = export_session_pdf(
        source=source,
        records=produce_line_explanations(source),
        result=ExecutionResult(captured_output="ok"),
        output_dir=tmp_path / "reports",
    )

    assert pdf_path.parent == tmp_path / "reports"
    assert pdf_path.read_bytes().startswith(b"%PDF")
