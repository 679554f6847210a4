# === FILE: web_scout/parser/html_parser.py ===
"""HTML content extraction for WebScout.

Reduces a full HTML document to a title and its principal readable text:

* noise elements (``script``, ``style``, ``nav``, ``header``, ``footer``,
  ``aside``, ``noscript``) are removed together with their descendants;
* title: ``<title>`` text, else the first ``<h1>``, else ``""``;
* main content: the first element, in document order, that is a ``main``
  or ``article`` element or carries a ``content``, ``post`` or ``entry``
  class; otherwise ``<body>``.

Main-content detection is a best-effort heuristic. Pages laid out in other
ways simply yield their whole body text.
"""
from __future__ import annotations

import copy
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = (
    "NOISE_TAGS",
    "MAIN_CONTENT_SELECTORS",
    "ExtractedContent",
    "parse_html",
    "extract_title",
    "select_main",
    "normalize_text",
    "extract_content",
)

NOISE_TAGS: tuple[str, ...] = ("script", "style", "nav", "header", "footer", "aside", "noscript")
MAIN_CONTENT_SELECTORS: tuple[str, ...] = ("main", "article", ".content", ".post", ".entry")

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(slots=True, frozen=True)
class ExtractedContent:
    """Title and normalized text of one page."""

    title: str
    content: str
    truncated: bool = False


def parse_html(markup: Union[str, bytes], encoding: Optional[str] = None) -> BeautifulSoup:
    """Parse *markup* and drop every noise element."""
    if isinstance(markup, bytes):
        soup = BeautifulSoup(markup, "html.parser", from_encoding=encoding)
    else:
        soup = BeautifulSoup(markup, "html.parser")
    for element in soup(list(NOISE_TAGS)):
        # nested noise goes away with its ancestor
        if not element.decomposed:
            element.decompose()
    return soup


def extract_title(soup: BeautifulSoup) -> str:
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""
    if not title:
        h1 = soup.find("h1")
        title = h1.get_text().strip() if h1 else ""
    return _WHITESPACE_RE.sub(" ", title)


def select_main(soup: BeautifulSoup) -> Tag:
    """First main-content candidate in document order, else ``<body>``.

    Documents without a ``<body>`` fall back to a copy of the whole tree with
    ``<head>`` and ``<title>`` removed.
    """
    main = soup.select_one(", ".join(MAIN_CONTENT_SELECTORS))
    if main is not None:
        return main
    if soup.body is not None:
        return soup.body
    rest = copy.copy(soup)
    for element in rest(["head", "title"]):
        if not element.decomposed:
            element.decompose()
    return rest


def normalize_text(text: str) -> str:
    """Collapse whitespace runs, drop blank lines and trim."""
    collapsed = _WHITESPACE_RE.sub(" ", text)
    lines = [line for line in collapsed.split("\n") if line.strip()]
    return "\n".join(lines).strip()


def extract_content(soup: BeautifulSoup, max_chars: int) -> ExtractedContent:
    """Title plus main text of *soup*, cut hard at *max_chars* characters."""
    text = normalize_text(select_main(soup).get_text(" "))
    return ExtractedContent(
        title=extract_title(soup),
        content=text[:max_chars],
        truncated=len(text) > max_chars,
    )
