# File: tests/test_cli.py
"""CLI tests (`web_scout.cli`) using click.testing.CliRunner.
Covers `crawl`, `fetch`, `search`, `tools`, `config`, `--version` and error handling.
"""
import importlib
import json

import pytest
from click.testing import CliRunner
from web_scout.config import SEARXNG_ENV
from web_scout.crawler.models import CrawlReport, PageRecord
from web_scout.cli import cli
from web_scout.errors import InvalidURL
from web_scout.logger import init_logging
from web_scout.tools import ToolResult

# `web_scout.cli` (the Group) shadows the submodule attribute on the package
cli_module = importlib.import_module("web_scout.cli")

DUMMY_REPORT = CrawlReport(
    start_url="https://example.com",
    max_depth=1,
    pages=(PageRecord(url="https://example.com/", title="Home", content="Hello", depth=0),),
)


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run every command outside the repository so no configs/default.yaml is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(SEARXNG_ENV, raising=False)
    yield
    # the CLI bound log handlers to CliRunner's temporary stderr
    init_logging()


@pytest.fixture()
def fake_crawl(monkeypatch):
    """Patch start_crawl to return a fixed report without touching the network."""
    calls = []

    async def _fake(cfg, url, **kwargs):
        calls.append((url, kwargs))
        return DUMMY_REPORT

    monkeypatch.setattr(cli_module, "start_crawl", _fake)
    return calls


@pytest.fixture()
def fake_tool(monkeypatch):
    calls = []

    async def _fake(name, arguments, cfg):
        calls.append((name, arguments))
        if arguments.get("url") == "bad":
            return ToolResult("Error: Invalid URL 'bad'", is_error=True)
        return ToolResult(f"{name} ok")

    monkeypatch.setattr(cli_module, "call_tool", _fake)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "WebScout" in result.output


def test_show_config_with_file(tmp_path):
    cfg_file = tmp_path / "settings.json"
    cfg_file.write_text(json.dumps({"user_agent": "Agent/1.0", "crawl": {"max_pages": 7}}), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["user_agent"] == "Agent/1.0"
    assert data["crawl"]["max_pages"] == 7


def test_bad_config_exits(tmp_path):
    cfg_file = tmp_path / "settings.yaml"
    cfg_file.write_text("crawl:\n  max_pages: 0\n", encoding="utf-8")

    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Failed to load configuration" in result.output


def test_crawl_stdout(fake_crawl):
    result = CliRunner().invoke(cli, ["crawl", "https://example.com", "--max-depth", "9", "--max-pages", "3"])
    assert result.exit_code == 0
    assert result.output.startswith("Crawl results for: https://example.com\nPages crawled: 1\n")
    assert fake_crawl == [("https://example.com", {"max_depth": 5, "max_pages": 3, "same_domain": None})]


def test_crawl_any_domain_flag(fake_crawl):
    result = CliRunner().invoke(cli, ["crawl", "https://example.com", "--any-domain"])
    assert result.exit_code == 0
    assert fake_crawl[0][1]["same_domain"] is False


def test_crawl_json_and_html_files(tmp_path, fake_crawl):
    json_out = tmp_path / "out" / "crawl.json"
    html_out = tmp_path / "out" / "crawl.html"
    result = CliRunner().invoke(
        cli, ["crawl", "https://example.com", "--json", str(json_out), "--html", str(html_out)]
    )
    assert result.exit_code == 0
    assert json.loads(json_out.read_text(encoding="utf-8"))["pages"][0]["title"] == "Home"
    assert "Hello" in html_out.read_text(encoding="utf-8")
    assert "JSON report:" in result.output
    assert "HTML report:" in result.output


def test_crawl_invalid_seed(monkeypatch):
    async def _raise(cfg, url, **kwargs):
        raise InvalidURL(url, "unsupported scheme ftp")

    monkeypatch.setattr(cli_module, "start_crawl", _raise)
    result = CliRunner().invoke(cli, ["crawl", "ftp://example.com"])
    assert result.exit_code == 1
    assert "unsupported scheme ftp" in result.output


def test_fetch_command(fake_tool):
    result = CliRunner().invoke(cli, ["fetch", "https://example.com/doc"])
    assert result.exit_code == 0
    assert result.output == "web_fetch ok\n"
    assert fake_tool == [("web_fetch", {"url": "https://example.com/doc"})]


def test_fetch_error_exits(fake_tool):
    result = CliRunner().invoke(cli, ["fetch", "bad"])
    assert result.exit_code == 1
    assert "Invalid URL" in result.output


def test_search_command_passes_only_given_options(fake_tool):
    result = CliRunner().invoke(cli, ["search", "python asyncio", "--time-range", "month", "--safesearch", "0"])
    assert result.exit_code == 0
    assert fake_tool == [
        (
            "search",
            {"query": "python asyncio", "limit": 10, "time_range": "month", "safesearch": 0, "pageno": 1},
        )
    ]


def test_tools_command():
    result = CliRunner().invoke(cli, ["tools"])
    assert result.exit_code == 0
    assert [t["name"] for t in json.loads(result.output)] == ["search", "web_fetch", "web_crawl"]
