"""
Static HTML crawler using httpx and BeautifulSoup.

This crawler is used for sites that don't require JavaScript rendering.
It's faster and more resource-efficient than the Playwright-based crawler.
"""

from typing import Optional, Dict
from bs4 import BeautifulSoup
import httpx
import logging

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) '
    'AppleWebKit/537.36 (KHTML, like Gecko) '
    'Chrome/112.0.5615.121 Safari/537.36'
)


class StaticCrawler:
    """
    Wrapper for fetching static HTML pages.

    Uses httpx for async HTTP requests and BeautifulSoup for parsing.
    The HTTP client lives for one `async with` block:

        async with StaticCrawler() as crawler:
            soup = await crawler.fetch_soup(url)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the static crawler.

        Args:
            timeout: Request timeout in seconds
            headers: Custom HTTP headers
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.headers = headers or {
            'User-Agent': DEFAULT_USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.9',
            'Accept-Encoding': 'gzip, deflate',  # Some sites have issues with brotli
        }
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.timeout,
                headers=self.headers,
                transport=self.transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def fetch(self, url: str) -> str:
        """
        Fetch a URL and return HTML content.

        Args:
            url: URL to fetch

        Returns:
            HTML content as string

        Raises:
            httpx.HTTPError: On request failure or error status
        """
        logger.debug(f"StaticCrawler fetching: {url}")
        client = await self._get_client()
        response = await client.get(url)

        # Some sites return 500 but still have valid content
        if response.status_code >= 400:
            if len(response.text) > 1000 and '<html' in response.text.lower():
                logger.warning(f"Got status {response.status_code} but response has content, proceeding")
                return response.text
            response.raise_for_status()

        return response.text

    async def fetch_soup(self, url: str) -> BeautifulSoup:
        """
        Fetch a URL and return parsed BeautifulSoup.

        Args:
            url: URL to fetch

        Returns:
            BeautifulSoup object
        """
        html = await self.fetch(url)
        return BeautifulSoup(html, 'html.parser')

    async def __aenter__(self):
        """Async context manager entry."""
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
