# link_scout/report/console.py
"""Summary printed at the end of a crawl, rendered with rich tables."""

from __future__ import annotations

import io
from typing import List, Sequence, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text

from link_scout.aggregator import CrawlReport
from link_scout.report.csv_report import CSV_HEADER

# wide enough that URLs are never wrapped mid-cell
_CONSOLE_WIDTH = 200


def _table(header: Sequence[str], rows: List[Tuple[str, ...]], styles: Sequence[str]) -> Table:
    table = Table()
    for name, style in zip(header, styles):
        table.add_column(name, style=style, overflow="fold")
    for row in rows:
        # URLs may contain "[...]", which rich would read as markup
        table.add_row(*(Text(cell) for cell in row))
    return table


def render_table(report: CrawlReport) -> str:
    """Broken pages as a table, then failed navigations and the visited count."""
    console = Console(file=io.StringIO(), record=True, width=_CONSOLE_WIDTH, color_system=None)

    console.print(f"Broken pages found: {len(report.broken)}", highlight=False)
    if report.broken:
        console.print(_table(CSV_HEADER, report.rows(), ("cyan", "green")))
    if report.failed:
        failed = [(page.url, page.referrer, page.error) for page in report.failed.values()]
        console.print()
        console.print(f"Pages that could not be loaded: {len(report.failed)}", highlight=False)
        console.print(_table(("URL", "Found on", "Error"), failed, ("cyan", "green", "red")))
    console.print()
    console.print(f"Visited URLs: {report.visited}", highlight=False)
    return console.export_text()


__all__ = ["render_table"]
