"""
Parsers for the string-encoded fields of feed entries.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Tuple

from packaging import version as pkg_version

from .errors import FormatError


DOWNLOADS_SENTINEL = -1

_INTEGER_RE = re.compile(r"[ \t\r\n]*[+-]?[0-9]+[ \t\r\n]*", re.ASCII)


def parse_our_edge(dependencies: str, target_package: str) -> Tuple[str, str]:
    """Pick the dependency edge that names the target package.

    ``dependencies`` is the feed's ``Dependencies`` field, ``|``-separated
    tokens of the form ``packageId:versionSpec[:targetFramework]``. The first
    token containing ``target_package`` anywhere in its text wins; this is the
    same loose substring test the registry uses to select the entry, so an id
    like ``Foo.Extensions`` also matches ``Foo``.

    Args:
        dependencies: Raw dependency string of a dependant entry
        target_package: Package id the dependants were queried for

    Returns:
        Tuple of (package id, version spec) of the matching edge
    """
    for token in dependencies.split("|"):
        if target_package not in token:
            continue
        parts = token.split(":")
        if len(parts) < 2:
            raise FormatError(f"Dependency {token!r} has no version part")
        return parts[0], parts[1]

    raise FormatError(
        f"No dependency on {target_package!r} in {dependencies!r}; "
        "the feed filter and entry data disagree"
    )


def parse_integer(value: Optional[str]) -> Optional[int]:
    """Parse an ASCII base-10 integer with optional sign and surrounding whitespace."""
    if value is None or not _INTEGER_RE.fullmatch(value):
        return None
    return int(value)


def parse_downloads(value: Optional[str]) -> int:
    """Parse a download count, returning -1 when it is not an integer."""
    parsed = parse_integer(value)
    return DOWNLOADS_SENTINEL if parsed is None else parsed


def summarize_versions(versions: Iterable[str]) -> Optional[str]:
    """Return the highest parseable version, ignoring ones packaging rejects."""
    parsed = []
    for ver in versions:
        try:
            parsed.append((pkg_version.parse(ver), ver))
        except pkg_version.InvalidVersion:
            continue
    if not parsed:
        return None
    parsed.sort(key=lambda item: item[0])
    return parsed[-1][1]
