"""Write the text and HTML reports for a comparison."""

from pathlib import Path

from bumpgate.contracts import Comparison

from .html import render_html_report
from .text import render_text_report


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def write_reports(comparison: Comparison, text_report: Path, html_report: Path) -> None:
    """Write both reports. Any I/O failure propagates."""
    _write(text_report, render_text_report(comparison))
    _write(html_report, render_html_report(comparison))
