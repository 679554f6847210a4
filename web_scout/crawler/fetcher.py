# web_scout/crawler/fetcher.py
"""
Fetcher module: bounded HTTP GET with timeout, capped redirects and a fixed User-Agent.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, TooManyRedirects

from web_scout.config import Settings
from web_scout.crawler.models import FailureReason, FetchedPage, FetchFailure, FetchOutcome
from web_scout.errors import FetchError
from web_scout.logger import logger

CRAWLABLE_TYPES = ("text/html", "text/plain")


def is_crawlable(content_type: str) -> bool:
    """True when a crawl should parse a body of this ``Content-Type``."""
    ctype = (content_type or "").lower()
    return any(t in ctype for t in CRAWLABLE_TYPES)


class Fetcher:
    """Owns one ClientSession; each request is bounded by its own timeout."""

    def __init__(
        self,
        settings: Settings,
        *,
        timeout: float,
        max_redirects: int,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.settings = settings
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.session = session
        self._owns_session = session is None

    @classmethod
    def for_crawl(cls, settings: Settings) -> Fetcher:
        return cls(settings, timeout=settings.crawl.timeout, max_redirects=settings.crawl.max_redirects)

    @classmethod
    def for_single_page(cls, settings: Settings) -> Fetcher:
        return cls(settings, timeout=settings.fetch.timeout, max_redirects=settings.fetch.max_redirects)

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.settings.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str, *, crawlable_only: bool = False) -> FetchOutcome:
        """
        GET *url* and return the raw body.

        Returns FetchedPage on a 2xx response, FetchFailure on timeout,
        transport error, non-2xx status or too many redirects. With
        *crawlable_only* the body of a non-crawlable response is not read
        and comes back empty.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(
                url,
                allow_redirects=self.max_redirects > 0,
                # aiohttp raises once the redirect count reaches max_redirects
                max_redirects=self.max_redirects + 1,
                timeout=ClientTimeout(total=self.timeout),
                headers={"User-Agent": self.settings.user_agent},
            ) as resp:
                if not 200 <= resp.status < 300:
                    return FetchFailure(url, FailureReason.HTTP_STATUS, f"HTTP {resp.status}")
                content_type = resp.headers.get("Content-Type", "")
                if crawlable_only and not is_crawlable(content_type):
                    body = b""
                else:
                    body = await resp.read()
                return FetchedPage(
                    url=str(resp.url),
                    body=body,
                    content_type=content_type,
                    charset=resp.charset,
                    status=resp.status,
                )
        except TooManyRedirects as exc:
            return FetchFailure(url, FailureReason.TOO_MANY_REDIRECTS, str(exc) or "too many redirects")
        except asyncio.TimeoutError:
            return FetchFailure(url, FailureReason.TIMEOUT, f"timed out after {self.timeout:g}s")
        except (ClientError, ValueError) as exc:
            # ValueError: yarl/idna reject hosts such as "a..b"
            return FetchFailure(url, FailureReason.NETWORK, str(exc) or type(exc).__name__)

    async def fetch_or_raise(self, url: str) -> FetchedPage:
        """Single-page variant of :meth:`fetch`: failures raise FetchError."""
        outcome = await self.fetch(url)
        if isinstance(outcome, FetchFailure):
            logger.warning("Fetch failed %s: %s", url, outcome.detail)
            raise FetchError(f"Failed to fetch URL: {outcome.detail}")
        return outcome


__all__ = ("Fetcher", "is_crawlable", "CRAWLABLE_TYPES")
