# backend/unravel/services/reports/__init__.py
from __future__ import annotations

"""
Reporting utilities for playground sessions.

This package provides:
- Markdown report generation for an analysis and its run
- PDF export built on top of the markdown report

High-level helpers exposed:

- build_session_markdown(source=..., records=..., result=...) -> str
- export_session_pdf(source=..., records=..., result=..., output_dir=...) -> pathlib.Path
"""

from .markdown_builder import build_session_markdown  # noqa: F401
from .pdf_exporter import export_markdown_to_pdf, export_session_pdf  # noqa: F401
