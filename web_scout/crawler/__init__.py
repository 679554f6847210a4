# web_scout/crawler/__init__.py
"""web_scout.crawler: fetching, link discovery and breadth-first orchestration."""

from web_scout.crawler.crawler import Crawler
from web_scout.crawler.fetcher import Fetcher, is_crawlable
from web_scout.crawler.models import CrawlReport, PageRecord

__all__ = ["Crawler", "Fetcher", "is_crawlable", "CrawlReport", "PageRecord"]
