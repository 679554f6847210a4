# File: tests/test_tools.py
from __future__ import annotations

import pytest
import pytest_asyncio
from aiohttp import web

import web_scout.tools as tools_module
from web_scout.config import SearchSettings, Settings
from web_scout.crawler.models import CrawlReport
from web_scout.tools import TOOLS, call_tool, list_tools

LONG_PAGE = "<html><head><title>Long</title></head><body><article>" + "word " * 3000 + "</article></body></html>"


@pytest_asyncio.fixture
async def site(serve_app) -> str:
    app = web.Application()

    async def root(_):
        return web.Response(
            text='<html><head><title>Home</title></head><body><main>Welcome</main>'
                 '<a href="/long">long</a><a href="/data.json">data</a></body></html>',
            content_type="text/html",
        )

    async def long_page(_):
        return web.Response(text=LONG_PAGE, content_type="text/html")

    async def data(_):
        return web.json_response({"a": 1})

    async def missing(_):
        return web.Response(status=404)

    app.router.add_get("/", root)
    app.router.add_get("/long", long_page)
    app.router.add_get("/data.json", data)
    app.router.add_get("/missing", missing)
    return await serve_app(app)


def test_registry():
    names = [tool["name"] for tool in list_tools()]
    assert names == ["search", "web_fetch", "web_crawl"]
    for tool in TOOLS:
        assert tool.input_schema["type"] == "object"
        assert tool.input_schema["required"] in (["query"], ["url"])


@pytest.mark.asyncio()
async def test_fetch_tool_formats_title_and_marks_cut(settings, site):
    result = await call_tool("web_fetch", {"url": site + "/long"}, settings)

    assert result.is_error is False
    assert result.text.startswith("Title: Long\n\nword word")
    assert result.text.endswith("...")
    assert len(result.text) == len("Title: Long\n\n") + 10_000 + 3


@pytest.mark.asyncio()
async def test_fetch_tool_has_no_content_type_filter(settings, site):
    result = await call_tool("web_fetch", {"url": site + "/data.json"}, settings)
    assert result.is_error is False
    assert result.text == '{"a": 1}'


@pytest.mark.asyncio()
async def test_fetch_tool_errors(settings, site):
    missing = await call_tool("web_fetch", {"url": site + "/missing"}, settings)
    assert missing.is_error is True
    assert missing.text == "Error: Failed to fetch URL: HTTP 404"

    invalid = await call_tool("web_fetch", {"url": "nonsense"}, settings)
    assert invalid.is_error is True
    assert invalid.text.startswith("Error: Invalid URL 'nonsense'")


@pytest.mark.asyncio()
async def test_crawl_tool_report(settings, site):
    result = await call_tool("web_crawl", {"url": site, "max_depth": 1, "max_pages": 5}, settings)

    assert result.is_error is False
    text = result.text
    assert text.startswith(f"Crawl results for: {site}\nPages crawled: 2\nMax depth: 1\n")
    assert "=== [Depth 0] Page 1 ===\nURL: " + site + "/\nTitle: Home\n\nWelcome\n\nLinks found: 2\n" in text
    assert "=== [Depth 1] Page 2 ===\nURL: " + site + "/long\nTitle: Long\n" in text
    assert "data.json\n" not in text


@pytest.mark.asyncio()
async def test_crawl_tool_clamps_limits(settings, monkeypatch):
    captured = {}

    async def fake_crawl(settings, url, **kwargs):
        captured.update(kwargs)
        return CrawlReport(start_url=url, max_depth=kwargs["max_depth"])

    monkeypatch.setattr(tools_module, "start_crawl", fake_crawl)

    result = await call_tool("web_crawl", {"url": "https://example.com", "max_depth": 9, "max_pages": 500}, settings)
    assert captured == {"max_depth": 5, "max_pages": 50, "same_domain": None}
    assert result.text == "Crawl results for: https://example.com\nPages crawled: 0\nMax depth: 5\n"

    await call_tool("web_crawl", {"url": "https://example.com"}, settings)
    assert captured["max_depth"] == 2
    assert captured["max_pages"] == 10


@pytest.mark.asyncio()
async def test_crawl_tool_invalid_seed(settings):
    result = await call_tool("web_crawl", {"url": "ftp://example.com"}, settings)
    assert result.is_error is True
    assert "unsupported scheme ftp" in result.text


@pytest.mark.asyncio()
async def test_search_tool_unreachable(unused_tcp_port_factory):
    settings = Settings(search=SearchSettings(base_url=f"http://127.0.0.1:{unused_tcp_port_factory()}"))
    result = await call_tool("search", {"query": "x"}, settings)
    assert result.is_error is True
    assert "Cannot connect to SearXNG" in result.text


@pytest.mark.asyncio()
async def test_unknown_tool_and_bad_arguments(settings):
    unknown = await call_tool("web_screenshot", {}, settings)
    assert (unknown.is_error, unknown.text) == (True, "Error: Unknown tool: web_screenshot")

    bad = await call_tool("web_crawl", {"url": "https://example.com", "max_pages": 0}, settings)
    assert bad.is_error is True
    assert bad.text.startswith("Error: ")

    missing = await call_tool("search", None, settings)
    assert missing.is_error is True


@pytest.mark.asyncio()
async def test_unexpected_handler_error_becomes_error_result(settings, monkeypatch):
    async def broken_crawl(settings, url, **kwargs):
        raise UnicodeError("label empty or too long")

    monkeypatch.setattr(tools_module, "start_crawl", broken_crawl)

    result = await call_tool("web_crawl", {"url": "https://example.com"}, settings)
    assert (result.is_error, result.text) == (True, "Error: label empty or too long")
