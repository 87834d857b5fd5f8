# link_scout/report/json_report.py

"""
JSON export of a LinkScout crawl.

Unlike the CSV report it also lists pages whose navigation failed.
"""
import json
from pathlib import Path

from link_scout.aggregator import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save report as JSON at output_path.

    :param report: CrawlReport with the crawl results
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from link_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/links.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8") as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
