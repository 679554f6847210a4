# File: web_scout/tools.py
"""web_scout.tools: the callable tools exposed to request/response clients.

Each tool has a name, a description and a JSON input schema. :func:`call_tool`
validates arguments, dispatches by name and turns every failure into an
error result carrying a readable message.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from web_scout.config import Settings
from web_scout.engine import fetch_page, start_crawl
from web_scout.errors import UnknownToolError, WebScoutError
from web_scout.logger import logger
from web_scout.report.text_report import render_crawl, render_fetch
from web_scout.search import SearchParams, search

__all__: Sequence[str] = ("ToolSpec", "ToolResult", "TOOLS", "list_tools", "call_tool")


@dataclass(slots=True, frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Dict[str, Any]


@dataclass(slots=True, frozen=True)
class ToolResult:
    """Text answer of a tool call; ``is_error`` marks a failed call."""

    text: str
    is_error: bool = False


class FetchArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., min_length=1)


class CrawlArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., min_length=1)
    max_depth: Optional[int] = Field(None, ge=0)
    max_pages: Optional[int] = Field(None, ge=1)
    same_domain: Optional[bool] = None


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="search",
        description=(
            "Search the web using the SearXNG metasearch engine. Aggregates results from "
            "multiple search engines and supports search syntax such as \"site:github.com\", "
            "time range filters, categories and language preferences."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "The search query."},
                "limit": {"type": "number", "description": "Maximum number of results (default: 10)", "default": 10},
                "category": {"type": "string", "description": "general, images, videos, news, science, files, music, social"},
                "engines": {"type": "string", "description": "Comma-separated list of engines"},
                "language": {"type": "string", "description": "Language code (e.g. en, fr, de, auto)"},
                "time_range": {"type": "string", "enum": ["day", "month", "year"]},
                "safesearch": {"type": "number", "enum": [0, 1, 2]},
                "pageno": {"type": "number", "description": "Page number (default: 1)", "default": 1},
            },
            "required": ["query"],
        },
    ),
    ToolSpec(
        name="web_fetch",
        description="Fetch a URL and extract its title and main text content.",
        input_schema={
            "type": "object",
            "properties": {"url": {"type": "string", "description": "The URL to fetch"}},
            "required": ["url"],
        },
    ),
    ToolSpec(
        name="web_crawl",
        description=(
            "Crawl a website breadth-first from a start URL, following links to extract "
            "content from multiple pages."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "url": {"type": "string", "description": "The starting URL"},
                "max_depth": {"type": "number", "description": "Maximum link depth (default: 2, max: 5)", "default": 2},
                "max_pages": {"type": "number", "description": "Maximum pages (default: 10, max: 50)", "default": 10},
                "same_domain": {"type": "boolean", "description": "Stay on the start URL's host (default: true)", "default": True},
            },
            "required": ["url"],
        },
    ),
)


def list_tools() -> List[Dict[str, Any]]:
    """Registry as plain dicts (name, description, input_schema)."""
    return [asdict(tool) for tool in TOOLS]


async def _run_search(arguments: Mapping[str, Any], settings: Settings) -> str:
    return await search(SearchParams(**arguments), settings)


async def _run_fetch(arguments: Mapping[str, Any], settings: Settings) -> str:
    args = FetchArgs(**arguments)
    return render_fetch(await fetch_page(settings, args.url))


async def _run_crawl(arguments: Mapping[str, Any], settings: Settings) -> str:
    args = CrawlArgs(**arguments)
    limits = settings.crawl
    max_depth = min(limits.max_depth if args.max_depth is None else args.max_depth, limits.max_depth_limit)
    max_pages = min(limits.max_pages if args.max_pages is None else args.max_pages, limits.max_pages_limit)
    report = await start_crawl(
        settings,
        args.url,
        max_depth=max_depth,
        max_pages=max_pages,
        same_domain=args.same_domain,
    )
    return render_crawl(report)


_HANDLERS: Dict[str, Callable[[Mapping[str, Any], Settings], Awaitable[str]]] = {
    "search": _run_search,
    "web_fetch": _run_fetch,
    "web_crawl": _run_crawl,
}


async def call_tool(name: str, arguments: Optional[Mapping[str, Any]], settings: Settings) -> ToolResult:
    """Invoke tool *name*; failures come back as ``ToolResult(is_error=True)``."""
    try:
        handler = _HANDLERS.get(name)
        if handler is None:
            raise UnknownToolError(name)
        return ToolResult(await handler(arguments or {}, settings))
    except (WebScoutError, ValidationError) as exc:
        logger.warning("Tool %s failed: %s", name, exc)
        return ToolResult(f"Error: {exc}", is_error=True)
    except Exception as exc:
        logger.exception("Tool %s crashed", name)
        return ToolResult(f"Error: {exc}", is_error=True)
