"""
Core data models for dependant discovery.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class DependantRecord:
    """A package that depends on the target, with the edge that qualified it."""

    id: str
    their_version: str
    downloads: int
    our_package: str
    our_version: str


@dataclass(frozen=True)
class FeedEntry:
    """Raw properties of a single feed entry."""

    id: Optional[str] = None
    download_count: Optional[str] = None
    version: Optional[str] = None
    dependencies: Optional[str] = None


@dataclass(frozen=True)
class FeedPage:
    """One page of a feed plus the link to the following page, if any."""

    entries: Tuple[FeedEntry, ...] = ()
    next_link: Optional[str] = None

    @property
    def has_next(self) -> bool:
        return self.next_link is not None
