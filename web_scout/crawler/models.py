# web_scout/crawler/models.py
"""
Data models for the WebScout crawler.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, Optional, Set, Tuple, Union


@dataclass(slots=True, frozen=True)
class FrontierItem:
    """A discovered URL waiting in the frontier, with its link distance from the seed."""

    url: str
    depth: int


@dataclass(slots=True)
class CrawlState:
    """Traversal state owned by exactly one crawl call."""

    frontier: Deque[FrontierItem] = field(default_factory=deque)
    visited: Set[str] = field(default_factory=set)


@dataclass(slots=True, frozen=True)
class PageRecord:
    """One successfully fetched and parsed page."""

    url: str
    title: str
    content: str
    depth: int
    links: Tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class CrawlReport:
    """Aggregate result of one crawl."""

    start_url: str
    max_depth: int
    pages: Tuple[PageRecord, ...] = ()

    @property
    def pages_crawled(self) -> int:
        return len(self.pages)


class FailureReason(str, Enum):
    """Why a page fetch produced no body."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    TOO_MANY_REDIRECTS = "too_many_redirects"


@dataclass(slots=True, frozen=True)
class FetchedPage:
    """Raw response of a successful GET."""

    url: str
    body: bytes
    content_type: str
    charset: Optional[str] = None
    status: int = 200


@dataclass(slots=True, frozen=True)
class FetchFailure:
    """A recoverable fetch failure, tagged with its reason."""

    url: str
    reason: FailureReason
    detail: str = ""


FetchOutcome = Union[FetchedPage, FetchFailure]

__all__ = (
    "FrontierItem",
    "CrawlState",
    "PageRecord",
    "CrawlReport",
    "FailureReason",
    "FetchedPage",
    "FetchFailure",
    "FetchOutcome",
)
