# web_scout/report/json_report.py

"""
JSON export of a WebScout crawl report.
"""
import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from web_scout.crawler.models import CrawlReport


def report_to_dict(report: CrawlReport) -> Dict[str, Any]:
    """Plain-dict view of *report* in crawl order."""
    return {
        'start_url': report.start_url,
        'pages_crawled': report.pages_crawled,
        'max_depth': report.max_depth,
        'pages': [
            {**asdict(page), 'links': list(page.links)}
            for page in report.pages
        ],
    }


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: finished CrawlReport
    :param output_path: path of the JSON file
    :return: Path of the written file

    Example:
    ```python
    from web_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/crawl.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report_to_dict(report), f, ensure_ascii=False, indent=2)

    return output
