"""Website content service for turning a company homepage into plain text."""

import asyncio
import logging
import re

import httpx
from bs4 import BeautifulSoup

from enrichment_api.errors import (
    BadStatus,
    ContentParseError,
    FetchRateLimited,
    FetchTimeout,
    InvalidWebsiteUrl,
    SiteUnreachable,
)

logger = logging.getLogger(__name__)

# Deadline for the whole request, body included (seconds)
REQUEST_TIMEOUT = 15.0

# Upper bound on the text handed to the AI client
MAX_CONTENT_LENGTH = 5000

USER_AGENT = "Mozilla/5.0 (compatible; VCDiscovery/1.0)"
REQUEST_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml",
}

# Elements that never carry company copy
STRIP_TAGS = ["script", "style", "nav", "footer"]

_WHITESPACE_RE = re.compile(r"\s+")


class WebsiteContentService:
    """Fetches a website and reduces its HTML to visible text."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the content service.

        Args:
            client: Optional pre-built HTTP client. When omitted one is
                created on first use and owned by this service.
        """
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this service created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "WebsiteContentService":
        self._get_client()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def fetch_text(self, url: str) -> str:
        """
        Fetch a website and return its cleaned body text.

        Args:
            url: Website URL exactly as supplied by the caller

        Returns:
            Whitespace-collapsed visible text, at most MAX_CONTENT_LENGTH chars

        Raises:
            FetchTimeout: The request exceeded REQUEST_TIMEOUT
            SiteUnreachable: DNS, connection or other transport failure
            FetchRateLimited: The server answered 429
            BadStatus: The server answered with another non-2xx status
            InvalidWebsiteUrl: The URL cannot be requested at all
            ContentParseError: The body could not be parsed as HTML
        """
        html = await self._fetch_page(url)
        text = self.extract_text(html)
        logger.info(f"Fetched {len(text)} characters of content from {url}")
        return text

    async def _fetch_page(self, url: str) -> str:
        """Fetch raw HTML, translating transport failures into FetchError types."""
        client = self._get_client()
        try:
            response = await asyncio.wait_for(
                client.get(url, headers=REQUEST_HEADERS, timeout=REQUEST_TIMEOUT),
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            return response.text
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning(f"Timed out fetching {url}: {e}")
            raise FetchTimeout(url, f"timed out after {REQUEST_TIMEOUT:g}s") from e
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP {e.response.status_code} fetching {url}")
            if e.response.status_code == 429:
                raise FetchRateLimited(url) from e
            raise BadStatus(url, e.response.status_code) from e
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            logger.warning(f"Cannot request {url!r}: {e}")
            raise InvalidWebsiteUrl(url, str(e) or "invalid URL") from e
        except httpx.RequestError as e:
            logger.warning(f"Transport error fetching {url}: {e}")
            raise SiteUnreachable(url, str(e) or type(e).__name__) from e

    def extract_text(self, html: str) -> str:
        """
        Reduce an HTML document to the visible text of its body.

        Args:
            html: Raw HTML content

        Returns:
            Cleaned text truncated to MAX_CONTENT_LENGTH characters
        """
        try:
            soup = BeautifulSoup(html, "lxml")
        except Exception as e:
            raise ContentParseError(f"Failed to parse website content: {e}") from e

        for element in soup(STRIP_TAGS):
            element.decompose()

        root = soup.body or soup
        text = root.get_text(separator=" ")
        text = _WHITESPACE_RE.sub(" ", text).strip()
        return text[:MAX_CONTENT_LENGTH]
