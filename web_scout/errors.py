# web_scout/errors.py
"""
Exception types raised by WebScout.

Only failures that end the whole call are exceptions. Per-page problems
during a crawl are returned as values (see :mod:`web_scout.crawler.models`).
"""
from __future__ import annotations


class WebScoutError(Exception):
    """Base class for all WebScout errors."""


class InvalidURL(WebScoutError, ValueError):
    """The input cannot be parsed as an absolute http(s) URL."""

    def __init__(self, url: str, reason: str = "invalid URL") -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class FetchError(WebScoutError):
    """A single-page fetch failed."""


class SearchError(WebScoutError):
    """The metasearch endpoint could not be queried."""


class UnknownToolError(WebScoutError, LookupError):
    """A tool name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


__all__ = ["WebScoutError", "InvalidURL", "FetchError", "SearchError", "UnknownToolError"]
