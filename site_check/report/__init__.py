# File: site_check/report/__init__.py
"""site_check.report: JSON and HTML report writers used by the CLI."""

from site_check.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_check.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
