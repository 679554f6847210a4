# File: web_scout/search.py
"""web_scout.search: SearXNG metasearch client.

Forwards the query to ``<base_url>/search?format=json`` and renders the JSON
answer as text: query, result count, then Infoboxes, Answers, Corrections,
Suggestions and Results, in that order.
"""

from __future__ import annotations

import asyncio
import errno
from typing import Any, Dict, List, Literal, Optional, Union

from aiohttp import ClientConnectorError, ClientError, ClientSession, ClientTimeout
from pydantic import BaseModel, ConfigDict, Field

from web_scout.config import Settings
from web_scout.errors import SearchError
from web_scout.logger import logger

__all__ = ["SearchParams", "build_query", "format_results", "search"]


class SearchParams(BaseModel):
    """Arguments of one metasearch query."""
    model_config = ConfigDict(extra="forbid")

    query: str = Field(..., min_length=1)
    limit: int = Field(10, ge=1)
    category: Optional[str] = None
    engines: Optional[str] = None
    language: Optional[str] = None
    time_range: Optional[Literal["day", "month", "year"]] = None
    safesearch: Optional[Literal[0, 1, 2]] = None
    pageno: int = Field(1, ge=1)


def build_query(params: SearchParams) -> Dict[str, Union[str, int]]:
    """Query-string parameters understood by SearXNG."""
    query: Dict[str, Union[str, int]] = {"q": params.query, "format": "json", "pageno": params.pageno}
    if params.category:
        query["categories"] = params.category
    if params.engines:
        query["engines"] = params.engines
    if params.language:
        query["language"] = params.language
    if params.time_range:
        query["time_range"] = params.time_range
    if params.safesearch is not None:
        query["safesearch"] = params.safesearch
    return query


def _excerpt(text: str, length: int) -> str:
    return text[:length] + ("..." if len(text) > length else "")


def _format_infoboxes(infoboxes: List[Dict[str, Any]]) -> str:
    text = ""
    for infobox in infoboxes:
        text += f"=== Infobox: {infobox.get('infobox', '')} ===\n"
        text += f"ID: {infobox.get('id', '')}\n"
        text += f"Content: {infobox.get('content', '')}\n"
        urls = infobox.get("urls") or []
        if urls:
            text += "Related URLs:\n"
            for url in urls:
                text += f"  - {url.get('title', '')}: {url.get('url', '')}\n"
        text += "\n"
    return text


def format_results(data: Dict[str, Any], limit: int = 10, excerpt_length: int = 500) -> str:
    """Render a SearXNG JSON response as text."""
    text = f"Query: {data.get('query', '')}\n"
    text += f"Number of results: {data.get('number_of_results', 0)}\n\n"

    text += _format_infoboxes(data.get("infoboxes") or [])

    answers = data.get("answers") or []
    if answers:
        text += "=== Answers ===\n"
        for answer in answers:
            text += f"{answer}\n"
        text += "\n"

    for title, key in (("Corrections", "corrections"), ("Suggestions", "suggestions")):
        items = data.get(key) or []
        if items:
            text += f"=== {title} ===\n"
            for item in items:
                text += f"- {item}\n"
            text += "\n"

    results = data.get("results") or []
    if not results:
        return text + "No results found\n"

    text += "=== Results ===\n"
    for i, result in enumerate(results[:limit], start=1):
        text += f"[{i}] {result.get('title', '')}\n"
        text += f"    URL: {result.get('url', '')}\n"
        text += f"    Content: {_excerpt(result.get('content') or '', excerpt_length)}\n"
        if result.get("engine"):
            text += f"    Engine: {result['engine']}\n"
        if result.get("score") is not None:
            text += f"    Score: {result['score']}\n"
        text += "\n"
    return text


def _refused(error: OSError) -> bool:
    return isinstance(error, ConnectionRefusedError) or getattr(error, "errno", None) == errno.ECONNREFUSED


async def _get_json(session: ClientSession, url: str, query: Dict[str, Union[str, int]], timeout: float) -> Any:
    async with session.get(url, params=query, timeout=ClientTimeout(total=timeout)) as resp:
        resp.raise_for_status()
        return await resp.json(content_type=None)


async def search(params: SearchParams, settings: Settings, session: Optional[ClientSession] = None) -> str:
    """Run *params* against the configured SearXNG instance and return rendered text.

    Raises SearchError when the endpoint is unreachable or answers with an error.
    """
    base_url = settings.search.base_url
    endpoint = f"{base_url}/search"
    query = build_query(params)
    logger.debug("Search %s params=%s", endpoint, query)

    try:
        if session is None:
            async with ClientSession(headers={"User-Agent": settings.user_agent}) as own:
                data = await _get_json(own, endpoint, query, settings.search.timeout)
        else:
            data = await _get_json(session, endpoint, query, settings.search.timeout)
    except ClientConnectorError as exc:
        if _refused(exc.os_error):
            raise SearchError(f"Cannot connect to SearXNG at {base_url}. Is the server running?") from exc
        raise SearchError(f"Search failed: {exc}") from exc
    except (ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise SearchError(f"Search failed: {str(exc) or type(exc).__name__}") from exc

    if not isinstance(data, dict):
        raise SearchError(f"Search failed: unexpected response of type {type(data).__name__}")
    return format_results(data, limit=params.limit, excerpt_length=settings.search.excerpt_length)
