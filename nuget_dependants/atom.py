"""
Parse NuGet v1 OData Atom feeds into FeedPage values.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import unquote
from xml.etree import ElementTree

from .errors import FormatError
from .models import FeedEntry, FeedPage


logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
DATA_NS = "http://schemas.microsoft.com/ado/2007/08/dataservices"
METADATA_NS = "http://schemas.microsoft.com/ado/2007/08/dataservices/metadata"

NAMESPACES = {
    "a": ATOM_NS,
    "d": DATA_NS,
    "m": METADATA_NS,
}

_NULL_ATTR = f"{{{METADATA_NS}}}null"


def _property_text(properties: Optional[ElementTree.Element], name: str) -> Optional[str]:
    if properties is None:
        return None
    node = properties.find(f"d:{name}", NAMESPACES)
    if node is None or node.get(_NULL_ATTR) == "true":
        return None
    return node.text or ""


def _parse_entry(entry: ElementTree.Element) -> FeedEntry:
    # Feeds normally nest properties under the entry, media-link entries put
    # them next to the content element instead.
    properties = entry.find("m:properties", NAMESPACES)
    if properties is None:
        properties = entry.find("a:content/m:properties", NAMESPACES)
    return FeedEntry(
        id=_property_text(properties, "Id"),
        download_count=_property_text(properties, "DownloadCount"),
        version=_property_text(properties, "Version"),
        dependencies=_property_text(properties, "Dependencies"),
    )


def parse_feed_page(document: str | bytes) -> FeedPage:
    """Parse a feed document.

    Args:
        document: Raw XML of one feed page

    Returns:
        FeedPage with entries in document order and the unescaped ``next`` link
    """
    try:
        feed = ElementTree.fromstring(document)
    except ElementTree.ParseError as e:
        raise FormatError(f"Feed document is not valid XML: {e}") from e

    if feed.tag != f"{{{ATOM_NS}}}feed":
        raise FormatError(f"Expected an Atom feed, got <{feed.tag}>")

    entries = tuple(_parse_entry(entry) for entry in feed.findall("a:entry", NAMESPACES))

    next_link = None
    for link in feed.findall("a:link", NAMESPACES):
        if link.get("rel") == "next":
            href = link.get("href")
            if not href or not href.strip():
                raise FormatError("Feed has a next link without href")
            # Malformed UTF-8 escapes decode to U+FFFD rather than staying escaped.
            next_link = unquote(href)
            break

    logger.debug("Parsed feed page: %d entries, next=%s", len(entries), next_link)
    return FeedPage(entries=entries, next_link=next_link)
