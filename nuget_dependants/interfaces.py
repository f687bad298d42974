"""
Interfaces for the feed transport.
"""

from __future__ import annotations

from typing import Protocol

from .models import FeedPage


class FeedClient(Protocol):
    """Fetch documents from a package registry feed.

    Implementations raise ``TransportError`` when a request does not succeed
    and ``FormatError`` when a response cannot be parsed.
    """

    def package_uri(self, package_id: str) -> str:
        ...

    def dependants_uri(self, package_id: str) -> str:
        ...

    def dependants_count_uri(self, package_id: str) -> str:
        ...

    def fetch_page(self, uri: str) -> FeedPage:
        ...

    def fetch_text(self, uri: str) -> str:
        ...
