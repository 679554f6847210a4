# web_scout/report/text_report.py
"""
Plain-text rendering of crawl and fetch results, as returned to tool callers.
"""
from __future__ import annotations

from typing import List

from web_scout.crawler.models import CrawlReport, PageRecord
from web_scout.parser.html_parser import ExtractedContent


def _render_page(index: int, page: PageRecord) -> List[str]:
    lines = [f"=== [Depth {page.depth}] Page {index} ===", f"URL: {page.url}"]
    if page.title:
        lines.append(f"Title: {page.title}")
    lines += ["", page.content, ""]
    if page.links:
        lines += [f"Links found: {len(page.links)}", ""]
    return lines


def render_crawl(report: CrawlReport) -> str:
    """
    Header with start URL, page count and depth, then one block per page in
    crawl order.
    """
    lines = [
        f"Crawl results for: {report.start_url}",
        f"Pages crawled: {report.pages_crawled}",
        f"Max depth: {report.max_depth}",
        "",
    ]
    for index, page in enumerate(report.pages, start=1):
        lines += _render_page(index, page)
    return "\n".join(lines)


def render_fetch(extracted: ExtractedContent) -> str:
    """Optional ``Title:`` header, blank line, content; ``...`` marks a cut."""
    text = ""
    if extracted.title:
        text += f"Title: {extracted.title}\n\n"
    text += extracted.content
    if extracted.truncated:
        text += "..."
    return text


__all__ = ["render_crawl", "render_fetch"]
