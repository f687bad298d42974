"""
Collect every package that depends on a target package.
"""

from __future__ import annotations

import logging
import math
from typing import Iterator, List, Optional

from tqdm import tqdm

from .errors import FormatError
from .interfaces import FeedClient
from .models import DependantRecord, FeedPage
from .parsing import parse_downloads, parse_integer, parse_our_edge, summarize_versions


logger = logging.getLogger(__name__)

PAGE_SIZE = 100
DEFAULT_MAX_PAGES = 5000


class DependantCollector:
    """Walk the paged dependant feed of a package and build its records."""

    def __init__(
        self,
        client: FeedClient,
        package: str,
        max_pages: int = DEFAULT_MAX_PAGES,
        show_progress: bool = False,
    ):
        """Initialize the collector.

        Args:
            client: Feed client used for every request
            package: Id of the package whose dependants are collected
            max_pages: Upper bound on followed pages, guards against feeds
                that keep returning ``next`` links
            show_progress: Display a progress bar while fetching pages
        """
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self.client = client
        self.package = package
        self.max_pages = max_pages
        self.show_progress = show_progress

    def resolve_versions(self) -> List[str]:
        """Fetch the published versions of the target package."""
        logger.info("Querying for package %s...", self.package)
        page = self.client.fetch_page(self.client.package_uri(self.package))
        versions = [entry.version or "" for entry in page.entries]
        if versions:
            logger.info("Found versions: %s", ", ".join(versions))
            latest = summarize_versions(versions)
            if latest:
                logger.info("Highest version: %s", latest)
        else:
            logger.warning("No versions found for %s, is the package id correct?", self.package)
        return versions

    def count_dependants(self) -> int:
        """Ask the feed how many dependants to expect."""
        logger.info("Querying for dependant count...")
        body = self.client.fetch_text(self.client.dependants_count_uri(self.package))
        count = parse_integer(body)
        if count is None:
            raise FormatError(f"Dependant count is not an integer: {body!r}")
        logger.info("%d package(s).", count)
        return count

    def expected_pages(self, count: int) -> int:
        return math.ceil(count / PAGE_SIZE)

    def iter_pages(self, expected_pages: Optional[int] = None) -> Iterator[FeedPage]:
        """Yield dependant feed pages, following ``next`` links until none remain.

        Args:
            expected_pages: Page estimate used for progress output only

        Yields:
            Each fetched FeedPage in order
        """
        uri: Optional[str] = self.client.dependants_uri(self.package)
        total = expected_pages if expected_pages is not None else "?"

        with tqdm(
            total=expected_pages, unit="page", disable=not self.show_progress
        ) as pbar:
            for page_number in range(1, self.max_pages + 1):
                logger.info("Querying for dependants [%d/%s]...", page_number, total)
                page = self.client.fetch_page(uri)
                pbar.update(1)
                yield page

                if not page.has_next:
                    return
                uri = page.next_link

        raise FormatError(
            f"Feed still had a next link after {self.max_pages} pages, giving up"
        )

    def records_from_page(self, page: FeedPage) -> List[DependantRecord]:
        """Build one record per entry of a page, keeping feed order."""
        records = []
        for entry in page.entries:
            if not entry.id:
                raise FormatError("Feed entry without an Id")
            our_package, our_version = parse_our_edge(entry.dependencies or "", self.package)
            records.append(DependantRecord(
                id=entry.id,
                their_version=entry.version or "",
                downloads=parse_downloads(entry.download_count),
                our_package=our_package,
                our_version=our_version,
            ))
        return records

    def collect(self) -> List[DependantRecord]:
        """Run the full lookup.

        Returns:
            Every dependant record in feed order. Any failed request or
            malformed entry raises instead of returning a partial list.
        """
        self.resolve_versions()
        count = self.count_dependants()

        dependants: List[DependantRecord] = []
        for page in self.iter_pages(self.expected_pages(count)):
            dependants.extend(self.records_from_page(page))

        logger.info("Collected %d dependant(s) of %s", len(dependants), self.package)
        return dependants
