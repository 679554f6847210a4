# === FILE: web_scout/crawler/crawler.py ===
"""
Breadth-first crawl orchestration.

One crawl call owns a :class:`CrawlState` (FIFO frontier + visited set) and
drives fetch → extract → discover links → enqueue until the page budget is
spent or the frontier runs dry. Pages are fetched one at a time.
"""
from __future__ import annotations

import time
from typing import List, Optional

from web_scout.config import Settings
from web_scout.crawler.fetcher import Fetcher, is_crawlable
from web_scout.crawler.link_extractor import extract_links
from web_scout.crawler.models import (
    CrawlReport,
    CrawlState,
    FetchFailure,
    FrontierItem,
    PageRecord,
)
from web_scout.logger import logger
from web_scout.parser.html_parser import extract_content, parse_html
from web_scout.utils import canonicalize_url, extract_host, in_scope, try_canonicalize

__all__ = ("Crawler",)


class Crawler:
    """Sequential breadth-first crawler bounded by depth and page count."""

    def __init__(self, fetcher: Fetcher, settings: Settings) -> None:
        self.fetcher = fetcher
        self.settings = settings

    async def crawl(
        self,
        start_url: str,
        *,
        max_depth: Optional[int] = None,
        max_pages: Optional[int] = None,
        same_domain: Optional[bool] = None,
    ) -> CrawlReport:
        """Crawl from *start_url*. An unparseable seed raises InvalidURL."""
        opts = self.settings.crawl
        max_depth = opts.max_depth if max_depth is None else max_depth
        max_pages = opts.max_pages if max_pages is None else max_pages
        same_domain = opts.same_domain if same_domain is None else same_domain

        seed = canonicalize_url(start_url)
        reference_host = extract_host(seed)
        admission_cap = max_pages * opts.frontier_factor

        state = CrawlState()
        state.frontier.append(FrontierItem(seed, 0))
        results: List[PageRecord] = []

        logger.info(
            "Crawl start: %s (max_depth=%d, max_pages=%d, same_domain=%s)",
            seed, max_depth, max_pages, same_domain,
        )
        start = time.monotonic()

        while state.frontier and len(results) < max_pages:
            item = state.frontier.popleft()

            url = try_canonicalize(item.url)
            if url is None or url in state.visited:
                continue
            state.visited.add(url)

            if not in_scope(url, reference_host, same_domain):
                logger.debug("Out of scope: %s", url)
                continue

            outcome = await self.fetcher.fetch(url, crawlable_only=True)
            if isinstance(outcome, FetchFailure):
                logger.debug("Skipped %s [%s]: %s", url, outcome.reason.value, outcome.detail)
                continue
            if not is_crawlable(outcome.content_type):
                logger.debug("Skipped %s: content type %r", url, outcome.content_type)
                continue

            soup = parse_html(outcome.body, outcome.charset)
            extracted = extract_content(soup, opts.content_limit)
            follow = item.depth < max_depth
            links = extract_links(soup, url, state.visited) if follow else []

            results.append(
                PageRecord(
                    url=url,
                    title=extracted.title,
                    content=extracted.content,
                    depth=item.depth,
                    links=tuple(links),
                )
            )

            if follow:
                for link in links:
                    if len(results) + len(state.frontier) >= admission_cap:
                        break
                    if link not in state.visited:
                        state.frontier.append(FrontierItem(link, item.depth + 1))

        duration = time.monotonic() - start
        logger.info(
            "Crawl done: %d pages in %.2f s (%d URLs visited)",
            len(results), duration, len(state.visited),
        )
        return CrawlReport(start_url=start_url, max_depth=max_depth, pages=tuple(results))
