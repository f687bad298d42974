"""
Command-line interface for finding NuGet dependants.
"""

import argparse
import logging
import sys
from pathlib import Path

from .collector import DEFAULT_MAX_PAGES, DependantCollector
from .errors import ArgumentError, DependantsError
from .feed_client import NuGetFeedClient
from .reporting import export_records_csv, print_summary, write_markdown_report


logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """Parser that reports bad input as ArgumentError instead of exiting with 2."""

    def error(self, message):
        raise ArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog="nuget-dependants",
        description="List the NuGet packages that depend on a package and write them to Markdown"
    )

    parser.add_argument(
        "package",
        nargs="?",
        metavar="PackageId",
        help="Id of the package whose dependants are listed"
    )

    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for <PackageId>-dependants.md. Default: current directory"
    )

    parser.add_argument(
        "--api-base",
        default=NuGetFeedClient.API_BASE,
        help=f"Packages collection of the v1 feed service. Default: {NuGetFeedClient.API_BASE}"
    )

    parser.add_argument(
        "--max-pages",
        type=int,
        default=DEFAULT_MAX_PAGES,
        help=f"Stop with an error after this many pages. Default: {DEFAULT_MAX_PAGES}"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=NuGetFeedClient.DEFAULT_TIMEOUT,
        help=f"Per-request timeout in seconds. Default: {NuGetFeedClient.DEFAULT_TIMEOUT:g}"
    )

    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also export the dependants to <PackageId>-dependants.csv"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not display a progress bar while fetching pages"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every request"
    )

    return parser


def _validate(args: argparse.Namespace) -> None:
    if not args.package or not args.package.strip():
        raise ArgumentError("Missing argument PackageId")
    if args.max_pages < 1:
        raise ArgumentError("--max-pages must be at least 1")
    if args.timeout <= 0:
        raise ArgumentError("--timeout must be positive")


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        _validate(args)
    except ArgumentError as e:
        print(f"Error: {e}")
        parser.print_usage(sys.stdout)
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    package = args.package.strip()
    client = NuGetFeedClient(api_base=args.api_base, timeout=args.timeout)
    collector = DependantCollector(
        client,
        package,
        max_pages=args.max_pages,
        show_progress=not args.no_progress,
    )

    try:
        dependants = collector.collect()
        print_summary(package, dependants)

        output_dir = Path(args.output_dir)
        report_file = write_markdown_report(package, dependants, output_dir)
        print(f"Results saved to: {report_file}")

        if args.csv:
            csv_file = export_records_csv(dependants, output_dir, package)
            print(f"CSV saved to: {csv_file}")

    except DependantsError as e:
        print(f"\nError: {e}. Aborting.", file=sys.stderr)
        logger.debug("Run failed", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
