# File: web_scout/engine.py
"""web_scout.engine: orchestration layer wiring settings, fetcher, crawler and extractor."""

from __future__ import annotations

from typing import Optional

from web_scout.config import Settings
from web_scout.crawler.crawler import Crawler
from web_scout.crawler.fetcher import Fetcher
from web_scout.crawler.models import CrawlReport
from web_scout.logger import logger
from web_scout.parser.html_parser import ExtractedContent, extract_content, parse_html
from web_scout.utils import canonicalize_url

__all__ = ["start_crawl", "fetch_page"]


async def start_crawl(
    settings: Settings,
    url: str,
    *,
    max_depth: Optional[int] = None,
    max_pages: Optional[int] = None,
    same_domain: Optional[bool] = None,
) -> CrawlReport:
    """Run one crawl with the crawl fetch profile and return its report."""
    async with Fetcher.for_crawl(settings) as fetcher:
        crawler = Crawler(fetcher, settings)
        return await crawler.crawl(url, max_depth=max_depth, max_pages=max_pages, same_domain=same_domain)


async def fetch_page(settings: Settings, url: str) -> ExtractedContent:
    """Fetch a single page and extract its title and main text.

    Raises InvalidURL for a bad target and FetchError when the request fails.
    No content-type filter applies here.
    """
    target = canonicalize_url(url)
    logger.info("Fetching %s", target)
    async with Fetcher.for_single_page(settings) as fetcher:
        page = await fetcher.fetch_or_raise(target)
    soup = parse_html(page.body, page.charset)
    return extract_content(soup, settings.fetch.content_limit)
