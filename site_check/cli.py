# === FILE: site_check/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for SiteCheck.

Commands:
  crawl     Crawl the configured subsection and report every failure
  smoke     Check the landing page and a few sampled links
  config    Show the effective configuration

Common options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --limit INT         Page ceiling for the crawl (overrides max_pages)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only when omitted)
  --log-format FORMAT Logging format string

crawl options:
  --json PATH         Save the JSON report to a file
  --html PATH         Save the HTML report to a file
  --template DIR      Directory with Jinja2 templates
  --pretty            Indent JSON output by 2
  --run-timeout SEC   Timeout for the whole run (seconds)

Also:
  --version, -v       Show the SiteCheck version

Example:
  site-check --config configs/default.yaml crawl --json reports/crawl.json --limit 50
"""
import sys
import asyncio
from pathlib import Path

import click

from site_check import __version__
from site_check.config import load_config
from site_check.engine import build_report, run_crawl, run_smoke
from site_check.errors import FailuresFoundError, SiteCheckError
from site_check.crawler.smoke import finish_smoke
from site_check.logger import DEFAULT_FORMAT, init_logging
from site_check.report.json_report import render_json
from site_check.report.html_report import render_html

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _run(coro, run_timeout):
    if run_timeout:
        return asyncio.run(asyncio.wait_for(coro, timeout=run_timeout))
    return asyncio.run(coro)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCheck, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON config file.'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Page ceiling for the crawl (overrides max_pages)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout only when omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, limit, log_level, log_file, log_format):
    """SiteCheck: crawl and smoke-test one website subsection in a real browser."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load config: {e}')
    if limit is not None:
        cfg = cfg.model_copy(update={'max_pages': limit})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
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
    help='Directory with Jinja2 templates (default: bundled)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output by 2'
)
@click.option(
    '--run-timeout', 'run_timeout',
    type=float,
    default=None,
    help='Timeout for the whole crawl (seconds)'
)
@click.pass_context
def crawl(ctx, json_output, html_output, template_dir, pretty, run_timeout):
    """Crawl the subsection breadth-first and fail on any resource error."""
    cfg = ctx.obj['config']
    try:
        result = _run(run_crawl(cfg), run_timeout)
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {run_timeout} seconds')
    except SiteCheckError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    report = build_report(result)

    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')

    if not report.ok:
        print_error(f'{len(report.failures)} resource failures found')


@cli.command('smoke', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output by 2'
)
@click.option(
    '--run-timeout', 'run_timeout',
    type=float,
    default=None,
    help='Timeout for the whole smoke check (seconds)'
)
@click.pass_context
def smoke(ctx, json_output, pretty, run_timeout):
    """Check the landing page and a few sampled links."""
    cfg = ctx.obj['config']
    try:
        result = _run(run_smoke(cfg), run_timeout)
    except asyncio.TimeoutError:
        print_error(f'Smoke check did not finish within {run_timeout} seconds')
    except SiteCheckError as e:
        print_error(f'Content check failed: {e}')
    except Exception as e:
        print_error(f'Smoke check failed: {e}')

    report = build_report(result)
    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')

    try:
        finish_smoke(result, cfg.smoke_report_cap)
    except FailuresFoundError as e:
        print_error(f'{len(e.failures)} same-origin resource failures found')
    click.echo(f'Smoke OK: {len(report.pages)} pages checked')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
