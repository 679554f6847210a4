# === FILE: web_scout/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for WebScout.

Commands:
  search    Query the SearXNG metasearch endpoint
  fetch     Fetch one page and print its title and main text
  crawl     Crawl a site breadth-first and print/save the report
  tools     Print the tool registry (names and input schemas) as JSON
  config    Show the effective settings

Global options:
  --config PATH       YAML/JSON settings file (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format string

crawl options:
  --max-depth INT     Link depth (clamped to the configured limit)
  --max-pages INT     Page budget (clamped to the configured limit)
  --same-domain / --any-domain
  --json PATH         Save the JSON report
  --html PATH         Save the HTML report
  --template DIR      Directory with report.html.j2

Also:
  --version, -v       Show the WebScout version

Example:
  web_scout crawl https://docs.example.com --max-depth 1 --max-pages 20 --json crawl.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from web_scout import __version__
from web_scout.config import load_config
from web_scout.engine import start_crawl
from web_scout.errors import WebScoutError
from web_scout.logger import DEFAULT_FORMAT, init_logging
from web_scout.report.html_report import render_html
from web_scout.report.json_report import render_json
from web_scout.report.text_report import render_crawl
from web_scout.tools import call_tool, list_tools

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _run_tool(ctx, name, arguments):
    result = asyncio.run(call_tool(name, arguments, ctx.obj['config']))
    if result.is_error:
        print_error(result.text)
    click.echo(result.text)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='WebScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON settings file.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """WebScout: web search, page fetch and bounded crawling."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('search', context_settings=CONTEXT_SETTINGS)
@click.argument('query')
@click.option('--limit', '-n', type=click.IntRange(min=1), default=10, show_default=True)
@click.option('--category', default=None, help='general, images, videos, news, ...')
@click.option('--engines', default=None, help='Comma-separated engine list')
@click.option('--language', default=None, help='Language code (en, fr, auto, ...)')
@click.option('--time-range', 'time_range', type=click.Choice(['day', 'month', 'year']), default=None)
@click.option('--safesearch', type=click.IntRange(0, 2), default=None)
@click.option('--pageno', type=click.IntRange(min=1), default=1, show_default=True)
@click.pass_context
def search_cmd(ctx, query, limit, category, engines, language, time_range, safesearch, pageno):
    """Search the web through SearXNG."""
    arguments = {
        'query': query,
        'limit': limit,
        'category': category,
        'engines': engines,
        'language': language,
        'time_range': time_range,
        'safesearch': safesearch,
        'pageno': pageno,
    }
    _run_tool(ctx, 'search', {k: v for k, v in arguments.items() if v is not None})


@cli.command('fetch', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def fetch_cmd(ctx, url):
    """Fetch URL and print its title and main text."""
    _run_tool(ctx, 'web_fetch', {'url': url})


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--max-depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Maximum link depth')
@click.option('--max-pages', '-p', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Maximum number of pages')
@click.option('--same-domain/--any-domain', 'same_domain', default=None,
              help='Stay on the start URL host')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (packaged template if omitted)'
)
@click.pass_context
def crawl_cmd(ctx, url, max_depth, max_pages, same_domain, json_output, html_output, template_dir):
    """Crawl breadth-first from URL and print or save the report."""
    cfg = ctx.obj['config']
    limits = cfg.crawl
    if max_depth is not None:
        max_depth = min(max_depth, limits.max_depth_limit)
    if max_pages is not None:
        max_pages = min(max_pages, limits.max_pages_limit)

    try:
        report = asyncio.run(
            start_crawl(cfg, url, max_depth=max_depth, max_pages=max_pages, same_domain=same_domain)
        )
    except WebScoutError as e:
        print_error(f'Error: {e}')

    if not json_output and not html_output:
        click.echo(render_crawl(report))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON report: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML report: {e}')


@cli.command('tools', context_settings=CONTEXT_SETTINGS)
def show_tools():
    """Print the tool registry as JSON."""
    click.echo(json.dumps(list_tools(), ensure_ascii=False, indent=2))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective settings as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
