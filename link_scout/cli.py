#!/usr/bin/env python3
"""
Command-line entry point for the LinkScout broken-link crawler.

Commands:
  scan      Crawl the configured origin and write the broken-link report
  config    Show the effective configuration

Common options:
  --config PATH       Path to the YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

scan options:
  --output PATH       CSV report path (overrides report_path)
  --json PATH         Also save a JSON report
  --backend NAME      Page fetcher backend: playwright or http
  --concurrency INT   Attempts per batch (overrides concurrency)

Also:
  --version, -v       Show the LinkScout version

Example:
  link_scout scan --config configs/default.yaml --output errores_404.csv
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from link_scout import __version__
from link_scout.config import load_config
from link_scout.engine import start_scan
from link_scout.logger import init_logging
from link_scout.report import render_csv, render_json, render_table

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='configs/default.yaml',
    show_default=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON configuration file.'
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
    help='Log file path (stdout only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Format string for log records'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """LinkScout command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--output', '-o', 'csv_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='CSV report path (overrides report_path)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also save a JSON report to this file'
)
@click.option(
    '--backend', '-b', 'backend',
    default=None,
    type=click.Choice(['playwright', 'http']),
    help='Page fetcher backend (overrides backend)'
)
@click.option(
    '--concurrency', '-n', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Attempts per batch (overrides concurrency)'
)
@click.pass_context
def scan(ctx, csv_output, json_output, backend, concurrency):
    """Crawl the configured origin and write the reports."""
    try:
        cfg = ctx.obj['config'].with_overrides(
            report_path=csv_output, backend=backend, concurrency=concurrency
        )
    except ValidationError as e:
        print_error(f'Invalid options: {e}')

    click.echo(f'Scanning with a real browser: {cfg.start_url}' if cfg.backend == 'playwright'
               else f'Scanning over plain HTTP: {cfg.start_url}')
    try:
        report = asyncio.run(start_scan(cfg))
    except Exception as e:
        print_error(f'Scan failed: {e}')

    click.echo(render_table(report))

    try:
        saved_csv = render_csv(report, cfg.report_path)
        click.echo(f'CSV report: {saved_csv}')
    except OSError as e:
        print_error(f'Failed to save CSV: {e}')

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the current configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
