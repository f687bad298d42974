"""
HTTP client for the NuGet v1 OData package feed.
"""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .atom import parse_feed_page
from .errors import TransportError
from .interfaces import FeedClient
from .models import FeedPage


logger = logging.getLogger(__name__)


class NuGetFeedClient(FeedClient):
    """Query the NuGet v1 feed service over HTTP."""

    API_BASE = "https://packages.nuget.org/v1/FeedService.svc/Packages"
    PACKAGE_QUERY = "?$filter='{0}' eq Id"
    DEPENDANT_QUERY = (
        "?$filter=IsLatestVersion and substringof('{0}', Dependencies)"
        "&$orderby=DownloadCount desc"
    )
    DEFAULT_TIMEOUT = 60.0

    def __init__(
        self,
        api_base: Optional[str] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the feed client.

        Args:
            api_base: Packages collection URL of the feed service
            timeout: Per-request timeout in seconds, None to wait indefinitely
            session: Session to reuse, a new one is created when omitted
        """
        self.api_base = (api_base or self.API_BASE).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def package_uri(self, package_id: str) -> str:
        return self.api_base + self.PACKAGE_QUERY.format(package_id)

    def dependants_uri(self, package_id: str) -> str:
        return self.api_base + self.DEPENDANT_QUERY.format(package_id)

    def dependants_count_uri(self, package_id: str) -> str:
        return self.api_base + "/$count" + self.DEPENDANT_QUERY.format(package_id)

    def fetch_page(self, uri: str) -> FeedPage:
        return parse_feed_page(self._get(uri).content)

    def fetch_text(self, uri: str) -> str:
        return self._get(uri).text

    def _get(self, uri: str) -> requests.Response:
        logger.debug("GET %s", uri)
        try:
            response = self.session.get(uri, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(
                uri, status=e.response.status_code, reason=e.response.reason or ""
            ) from e
        except requests.RequestException as e:
            raise TransportError(uri, reason=str(e)) from e
        return response
