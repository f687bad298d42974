#!/usr/bin/env python3
"""
Example script showing how to use nuget-dependants as a library.
"""

import logging
from pathlib import Path

from nuget_dependants.collector import DependantCollector
from nuget_dependants.feed_client import NuGetFeedClient
from nuget_dependants.reporting import export_records_csv, render_markdown, write_markdown_report


def example_basic_report():
    """Example: Collect dependants and write the Markdown report."""
    print("="*60)
    print("Example 1: Basic Report")
    print("="*60)

    client = NuGetFeedClient()
    collector = DependantCollector(client, "Serilog.Sinks.File", show_progress=True)
    dependants = collector.collect()

    report_file = write_markdown_report("Serilog.Sinks.File", dependants, Path("./output/example1"))
    print(f"\nDependants found: {len(dependants)}")
    print(f"Report written to: {report_file}")


def example_page_by_page():
    """Example: Inspect pages one at a time without collecting everything."""
    print("\n" + "="*60)
    print("Example 2: Page by Page")
    print("="*60)

    collector = DependantCollector(NuGetFeedClient(timeout=30), "Polly", max_pages=3)
    expected = collector.expected_pages(collector.count_dependants())
    print(f"Feed reports about {expected} page(s)")

    # max_pages raises once the limit is hit, so stop reading before that.
    for number, page in enumerate(collector.iter_pages(expected), start=1):
        records = collector.records_from_page(page)
        print(f"Page {number}: {len(records)} dependant(s), first: {records[0].id if records else '-'}")
        if number == 2:
            break


def example_markdown_and_csv():
    """Example: Render Markdown in memory and export a CSV."""
    print("\n" + "="*60)
    print("Example 3: Markdown and CSV")
    print("="*60)

    dependants = DependantCollector(NuGetFeedClient(), "Humanizer.Core").collect()

    print(render_markdown("Humanizer.Core", dependants[:10]))
    csv_file = export_records_csv(dependants, Path("./output/example3"), "Humanizer.Core")
    print(f"CSV written to: {csv_file}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    print("\nNuGet Dependants - Usage Examples\n")

    example_basic_report()
    example_page_by_page()
    example_markdown_and_csv()

    print("\n" + "="*60)
    print("Examples completed!")
    print("="*60)
