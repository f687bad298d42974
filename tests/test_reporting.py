from pathlib import Path

import pandas as pd
import pytest

from nuget_dependants.errors import OutputError
from nuget_dependants.models import DependantRecord
from nuget_dependants.reporting import (
    export_records_csv,
    print_summary,
    records_to_frame,
    render_markdown,
    render_record,
    write_markdown_report,
)


RECORDS = [
    DependantRecord(id="Bar", their_version="1.0.0", downloads=120, our_package="Foo", our_version="1.2.0"),
    DependantRecord(id="Qux", their_version="3.1.0", downloads=-1, our_package="Foo", our_version="1.0.0"),
    DependantRecord(id="Ext", their_version="0.1.0", downloads=7, our_package="Foo.Core", our_version="[2.0,3.0)"),
]


def test_render_record_same_package_has_no_marker():
    assert render_record(RECORDS[1], "Foo") == (
        " - [Qux](https://www.nuget.org/packages/Qux/) v3.1.0 => `1.0.0`"
    )


def test_render_record_other_package_is_bold():
    assert render_record(RECORDS[2], "Foo") == (
        " - [Ext](https://www.nuget.org/packages/Ext/) v0.1.0 => **Foo.Core** `[2.0,3.0)`"
    )


def test_render_markdown():
    text = render_markdown("Foo", RECORDS)

    lines = text.splitlines()
    assert lines[0] == "# NuGet packages depending on Foo:"
    assert len(lines) == 4
    assert lines[1].startswith(" - [Bar](")
    assert text.endswith("\n")


def test_render_markdown_no_records():
    assert render_markdown("Foo", []) == "# NuGet packages depending on Foo:\n"


def test_write_markdown_report(tmp_path: Path):
    output_dir = tmp_path / "out"

    report_file = write_markdown_report("Foo", RECORDS, output_dir)

    assert report_file == output_dir / "Foo-dependants.md"
    raw = report_file.read_bytes()
    assert not raw.startswith(b"\xef\xbb\xbf")
    assert b"\r\n" not in raw
    assert raw.decode("utf-8") == render_markdown("Foo", RECORDS)


def test_write_markdown_report_overwrites(tmp_path: Path):
    (tmp_path / "Foo-dependants.md").write_text("old content that is longer than the new report" * 10)

    report_file = write_markdown_report("Foo", RECORDS[:1], tmp_path)

    assert report_file.read_text(encoding="utf-8") == render_markdown("Foo", RECORDS[:1])


def test_write_markdown_report_failure(tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    with pytest.raises(OutputError, match="Failed to write"):
        write_markdown_report("Foo", RECORDS, blocker)


def test_records_to_frame_keeps_order():
    df = records_to_frame(RECORDS)

    assert list(df.columns) == ["id", "their_version", "downloads", "our_package", "our_version"]
    assert list(df["id"]) == ["Bar", "Qux", "Ext"]
    assert list(df["downloads"]) == [120, -1, 7]


def test_export_records_csv(tmp_path: Path):
    csv_file = export_records_csv(RECORDS, tmp_path, "Foo")

    assert csv_file == tmp_path / "Foo-dependants.csv"
    df = pd.read_csv(csv_file)
    assert list(df["our_package"]) == ["Foo", "Foo", "Foo.Core"]


def test_print_summary(caplog):
    with caplog.at_level("INFO", logger="nuget_dependants.reporting"):
        print_summary("Foo", RECORDS)

    assert "Dependants: 3" in caplog.text
    assert "Matched through another package id: 1" in caplog.text
    assert "Unparseable download counts: 1" in caplog.text
    assert "Most downloaded: Bar v1.0.0 (120 downloads)" in caplog.text


def test_print_summary_empty(caplog):
    with caplog.at_level("INFO", logger="nuget_dependants.reporting"):
        print_summary("Foo", [])

    assert "Dependants: 0" in caplog.text
