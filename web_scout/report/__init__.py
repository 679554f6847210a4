# File: web_scout/report/__init__.py
"""web_scout.report: text, JSON and HTML renderings of crawl and fetch results."""

from __future__ import annotations

from web_scout.report.html_report import render_html
from web_scout.report.json_report import render_json, report_to_dict
from web_scout.report.text_report import render_crawl, render_fetch

__all__ = ["render_crawl", "render_fetch", "render_json", "render_html", "report_to_dict"]
