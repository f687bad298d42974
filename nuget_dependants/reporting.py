"""
Reporting and export utilities.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

from .errors import OutputError
from .models import DependantRecord
from .parsing import DOWNLOADS_SENTINEL


logger = logging.getLogger(__name__)

PACKAGE_URL = "https://www.nuget.org/packages/{0}/"

RECORD_COLUMNS = ["id", "their_version", "downloads", "our_package", "our_version"]


def render_record(record: DependantRecord, target_package: str) -> str:
    line = f" - [{record.id}]({PACKAGE_URL.format(record.id)}) v{record.their_version} => "
    if record.our_package != target_package:
        line += f"**{record.our_package}** "
    return line + f"`{record.our_version}`"


def render_markdown(target_package: str, records: Iterable[DependantRecord]) -> str:
    lines = [f"# NuGet packages depending on {target_package}:"]
    lines.extend(render_record(record, target_package) for record in records)
    return "\n".join(lines) + "\n"


def report_path(output_dir: Path, target_package: str) -> Path:
    return Path(output_dir) / f"{target_package}-dependants.md"


def write_markdown_report(
    target_package: str,
    records: Sequence[DependantRecord],
    output_dir: Path = Path("."),
) -> Path:
    """Write the Markdown report, replacing any previous one.

    Args:
        target_package: Package the dependants were collected for
        records: Dependant records in feed order
        output_dir: Directory receiving ``<target_package>-dependants.md``

    Returns:
        Path of the written file
    """
    report_file = report_path(output_dir, target_package)
    logger.info("Writing results to output file %s", report_file)
    try:
        report_file.parent.mkdir(parents=True, exist_ok=True)
        # utf-8 (not utf-8-sig) so no byte-order mark is written
        with open(report_file, "w", encoding="utf-8", newline="\n") as f:
            f.write(render_markdown(target_package, records))
    except OSError as e:
        raise OutputError(f"Failed to write {report_file}: {type(e).__name__}: {e}") from e
    return report_file


def records_to_frame(records: Iterable[DependantRecord]) -> pd.DataFrame:
    rows = [
        {
            "id": r.id,
            "their_version": r.their_version,
            "downloads": r.downloads,
            "our_package": r.our_package,
            "our_version": r.our_version,
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def export_records_csv(
    records: Iterable[DependantRecord],
    output_dir: Path,
    target_package: str,
) -> Path:
    csv_file = Path(output_dir) / f"{target_package}-dependants.csv"
    try:
        csv_file.parent.mkdir(parents=True, exist_ok=True)
        records_to_frame(records).to_csv(csv_file, index=False)
    except OSError as e:
        raise OutputError(f"Failed to write {csv_file}: {type(e).__name__}: {e}") from e
    return csv_file


def print_summary(target_package: str, records: List[DependantRecord]) -> None:
    df = records_to_frame(records)
    logger.info("=" * 60)
    logger.info("DEPENDANTS OF %s", target_package)
    logger.info("=" * 60)
    logger.info("Dependants: %d", len(df))
    if df.empty:
        logger.info("=" * 60)
        return

    indirect = df[df["our_package"] != target_package]
    unknown_downloads = df[df["downloads"] == DOWNLOADS_SENTINEL]
    top = df.loc[df["downloads"].idxmax()]
    logger.info("Matched through another package id: %d", len(indirect))
    logger.info("Unparseable download counts: %d", len(unknown_downloads))
    logger.info("Most downloaded: %s v%s (%d downloads)", top["id"], top["their_version"], top["downloads"])
    logger.info("=" * 60)
