from typing import Dict, List, Optional

import pytest

from nuget_dependants.errors import TransportError
from nuget_dependants.models import FeedEntry, FeedPage


class FakeFeedClient:
    """In-memory feed keyed by request URI."""

    def __init__(
        self,
        pages: Dict[str, FeedPage],
        count: str = "0",
        failing: Optional[Dict[str, int]] = None,
    ) -> None:
        self.pages = pages
        self.count = count
        self.failing = failing or {}
        self.requests: List[str] = []

    def package_uri(self, package_id: str) -> str:
        return f"pkg:{package_id}"

    def dependants_uri(self, package_id: str) -> str:
        return f"deps:{package_id}"

    def dependants_count_uri(self, package_id: str) -> str:
        return f"count:{package_id}"

    def fetch_page(self, uri: str) -> FeedPage:
        self.requests.append(uri)
        if uri in self.failing:
            raise TransportError(uri, status=self.failing[uri], reason="Server Error")
        return self.pages.get(uri, FeedPage())

    def fetch_text(self, uri: str) -> str:
        self.requests.append(uri)
        if uri in self.failing:
            raise TransportError(uri, status=self.failing[uri], reason="Server Error")
        return self.count


def entry(id, downloads="1", version="1.0.0", dependencies="Foo:1.0.0:net45"):
    return FeedEntry(id=id, download_count=downloads, version=version, dependencies=dependencies)


@pytest.fixture
def foo_feed():
    pages = {
        "pkg:Foo": FeedPage(entries=(
            FeedEntry(id="Foo", version="1.0.0"),
            FeedEntry(id="Foo", version="1.2.0"),
        )),
        "deps:Foo": FeedPage(entries=(
            entry("Bar", "120", "1.0.0", "Foo:1.2.0:net45|Baz:2.0.0:net45"),
            entry("Qux", "abc", "3.1.0", "Foo:1.0.0:net45"),
        )),
    }
    return FakeFeedClient(pages, count="2")


@pytest.fixture
def make_client():
    return FakeFeedClient


@pytest.fixture
def make_entry():
    return entry
