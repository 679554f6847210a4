# web_scout/crawler/link_extractor.py
"""
Link discovery for WebScout crawls.
"""
from __future__ import annotations

from typing import AbstractSet, List

from bs4 import BeautifulSoup
from bs4.element import Tag

from web_scout.utils import try_canonicalize


def extract_links(soup: BeautifulSoup, page_url: str, visited: AbstractSet[str] = frozenset()) -> List[str]:
    """
    Absolute http(s) links of every ``<a href>`` in *soup*, in document order.

    Each href is resolved against *page_url* and its fragment removed.
    Malformed hrefs, other schemes and URLs already in *visited* are dropped.
    Repeats within the page are kept.
    """
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        absolute = try_canonicalize(href_val, page_url)
        if absolute is None or absolute in visited:
            continue
        links.append(absolute)
    return links


__all__ = ("extract_links",)
