# link_scout/report/csv_report.py

"""
CSV export of broken pages.

Format::

    URL con Error,Encontrado en
    "https://site/missing","https://site/"

Every value is quoted and embedded ``"`` characters are doubled.
"""
import csv
from pathlib import Path
from typing import List, Tuple

from link_scout.aggregator import CrawlReport

CSV_HEADER = ("URL con Error", "Encontrado en")


def render_csv(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Write the broken-page mapping of report to output_path, replacing the file.

    :param report: CrawlReport collected by the dispatcher
    :param output_path: path of the CSV file
    :return: Path of the saved file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open("w", encoding="utf-8", newline="") as f:
        f.write(",".join(CSV_HEADER) + "\n")
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerows(report.rows())

    return output


def read_csv(path: Path | str) -> List[Tuple[str, str]]:
    """Parse a file written by render_csv back into ``(url, referrer)`` pairs."""
    with Path(path).open(encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            return []
        if tuple(header) != CSV_HEADER:
            raise ValueError(f"Unexpected CSV header: {header}")
        return [(row[0], row[1]) for row in reader if row]
