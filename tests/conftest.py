# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import web

from web_scout.config import CrawlSettings, FetchSettings, SearchSettings, Settings

ServeApp = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def settings() -> Settings:
    """
    Settings with short timeouts suitable for local test servers.
    """
    return Settings(
        user_agent="TestAgent/1.0",
        crawl=CrawlSettings(timeout=2.0),
        fetch=FetchSettings(timeout=2.0),
        search=SearchSettings(timeout=2.0),
    )


@pytest_asyncio.fixture
async def serve_app(unused_tcp_port_factory) -> AsyncIterator[ServeApp]:
    """
    Start aiohttp applications on 127.0.0.1 and return their base URLs.
    Every started app is cleaned up after the test.
    """
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _serve

    for runner in runners:
        await runner.cleanup()
