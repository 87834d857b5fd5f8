# File: link_scout/report/__init__.py
"""link_scout.report: CSV, JSON and console renderings of a crawl report."""

from __future__ import annotations

from link_scout.report.console import render_table
from link_scout.report.csv_report import CSV_HEADER, read_csv, render_csv
from link_scout.report.json_report import render_json

__all__ = ["CSV_HEADER", "read_csv", "render_csv", "render_json", "render_table"]
