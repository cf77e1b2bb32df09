# backend/unravel/services/reports/pdf_exporter.py
from __future__ import annotations

"""
PDF export for session reports.

This module builds a PDF from a markdown string in a very simple way:
it renders the markdown as plain text, preserving headings, bullet
points, and code blocks as literal lines.
"""

import uuid
from pathlib import Path
from typing import List, Union

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from unravel.models import ExecutionResult, ExplanationRecord
from unravel.services.reports.markdown_builder import build_session_markdown

PageSize = tuple[float, float]


def export_markdown_to_pdf(
    markdown: str,
    output_path: Union[str, Path],
    *,
    page_size: PageSize = A4,
    margin_left: int = 40,
    margin_top: int = 40,
    line_height: int = 14,
) -> Path:
    """
    Render a markdown string into a simple text-based PDF.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(output_path), pagesize=page_size)
    width, height = page_size

    x = margin_left
    y = height - margin_top

    for line in markdown.splitlines():
        if y <= margin_top:
            c.showPage()
            y = height - margin_top
        c.drawString(x, y, line[:2000])  # guard against extremely long lines
        y -= line_height

    c.showPage()
    c.save()
    return output_path


def export_session_pdf(
    *,
    source: str,
    records: List[ExplanationRecord],
    result: ExecutionResult | None,
    output_dir: Union[str, Path],
) -> Path:
    """
    Generate the markdown report for a session and export it as a PDF file
    under the specified directory.
    """
    markdown = build_session_markdown(source=source, records=records, result=result)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    pdf_path = output_dir / f"unravel_{uuid.uuid4().hex}.pdf"
    return export_markdown_to_pdf(markdown, pdf_path)
