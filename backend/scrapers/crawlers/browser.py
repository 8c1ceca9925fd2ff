"""
Headless browser crawler for JavaScript-rendered sites.

Uses Playwright (Chromium) with a realistic browser identity, waits for the
network to settle and for a marker element before capturing the rendered HTML.
"""

import asyncio
from typing import Optional, Callable, Any
from bs4 import BeautifulSoup
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    TimeoutError as PlaywrightTimeoutError,
)
import logging

from .static import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class BrowserCrawler:
    """
    Crawler driving an isolated headless Chromium session.

    The browser is launched when the `async with` block is entered and torn
    down when it exits, whatever happened inside:

        async with BrowserCrawler() as crawler:
            soup = await crawler.fetch_soup(url, wait_selector='.card')

    Features:
    - Realistic user agent, viewport and headers
    - Automation indicators hidden from page scripts
    - Bounded navigation and marker waits
    """

    def __init__(
        self,
        navigation_timeout: float = 60.0,
        marker_timeout: float = 60.0,
        headless: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """
        Initialize the browser crawler.

        Args:
            navigation_timeout: Seconds to wait for navigation and network idle
            marker_timeout: Seconds to wait for the marker element
            headless: Run browser in headless mode
            user_agent: User agent string for the browser context
            playwright_factory: Callable returning a Playwright context manager
        """
        self.navigation_timeout = navigation_timeout
        self.marker_timeout = marker_timeout
        self.headless = headless
        self.user_agent = user_agent
        self.playwright_factory = playwright_factory
        self._playwright = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    @property
    def is_open(self) -> bool:
        """True while any browser resource is held."""
        return any(r is not None for r in (self._playwright, self._browser, self._context))

    async def _init_browser(self):
        """Start Playwright, launch Chromium and create the browser context."""
        try:
            self._playwright = await self.playwright_factory().start()

            logger.debug("Launching Chromium browser...")
            self._browser = await self._playwright.chromium.launch(
                headless=self.headless,
                args=[
                    '--disable-blink-features=AutomationControlled',
                    '--disable-dev-shm-usage',
                    '--no-sandbox',
                    '--disable-setuid-sandbox',
                    '--disable-gpu',
                ],
                handle_sigint=False,
                handle_sigterm=False,
                handle_sighup=False,
            )

            self._context = await self._browser.new_context(
                viewport={'width': 1920, 'height': 1080},
                user_agent=self.user_agent,
                locale='fr-FR',
                timezone_id='Europe/Paris',
                extra_http_headers={
                    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,image/apng,*/*;q=0.8',
                    'Accept-Language': 'fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7',
                    'Upgrade-Insecure-Requests': '1',
                }
            )

            # Hide automation indicators
            await self._context.add_init_script("""
                Object.defineProperty(navigator, 'webdriver', {
                    get: () => undefined
                });
                Object.defineProperty(navigator, 'languages', {
                    get: () => ['fr-FR', 'fr', 'en-US', 'en']
                });
            """)

        except asyncio.CancelledError:
            # Cancelled mid-startup (e.g. per-source timeout), __aexit__ will not run
            logger.warning("Browser startup cancelled, releasing partial session")
            await self._cleanup()
            raise
        except Exception as e:
            logger.error(f"Failed to initialize browser: {e}")
            # Clean up partial initialization
            await self._cleanup()
            raise

    async def _cleanup(self):
        """Clean up browser resources with timeouts to prevent hanging."""
        cleanup_timeout = 2.0

        if self._context:
            try:
                await asyncio.wait_for(self._context.close(), timeout=cleanup_timeout)
            except asyncio.TimeoutError:
                logger.warning("Context close timed out, forcing cleanup")
            except Exception as e:
                logger.warning(f"Error closing context: {e}")
            self._context = None

        if self._browser:
            try:
                await asyncio.wait_for(self._browser.close(), timeout=cleanup_timeout)
            except asyncio.TimeoutError:
                logger.warning("Browser close timed out, forcing cleanup")
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright:
            try:
                await asyncio.wait_for(self._playwright.stop(), timeout=cleanup_timeout)
            except asyncio.TimeoutError:
                logger.warning("Playwright stop timed out, forcing cleanup")
            except Exception as e:
                logger.warning(f"Error stopping playwright: {e}")
            self._playwright = None

    async def fetch(self, url: str, wait_selector: Optional[str] = None) -> Optional[str]:
        """
        Render a URL and return its HTML.

        Args:
            url: URL to fetch
            wait_selector: Optional CSS selector of the marker element

        Returns:
            Rendered HTML, or None if the marker element never appeared

        Raises:
            RuntimeError: If called outside the `async with` block or on HTTP error status
            playwright.async_api.Error: On navigation failure or timeout
        """
        if self._context is None:
            raise RuntimeError("Browser session not started, use 'async with BrowserCrawler()'")

        logger.debug(f"BrowserCrawler fetching: {url}")
        page = await self._context.new_page()
        try:
            response = await page.goto(
                url,
                wait_until='networkidle',
                timeout=int(self.navigation_timeout * 1000)
            )

            if response and response.status >= 400:
                raise RuntimeError(f"HTTP {response.status} for {url}")

            if wait_selector:
                try:
                    await page.wait_for_selector(
                        wait_selector,
                        state='attached',
                        timeout=int(self.marker_timeout * 1000)
                    )
                except PlaywrightTimeoutError:
                    logger.warning(
                        f"Timeout waiting for '{wait_selector}' on {url}. "
                        f"The page structure may have changed, or the request was blocked."
                    )
                    return None

            return await page.content()
        finally:
            try:
                await page.close()
            except Exception as e:
                logger.debug(f"Error closing page: {e}")

    async def fetch_soup(self, url: str, wait_selector: Optional[str] = None) -> Optional[BeautifulSoup]:
        """
        Render a URL and return parsed BeautifulSoup.

        Args:
            url: URL to fetch
            wait_selector: Optional CSS selector of the marker element

        Returns:
            BeautifulSoup object, or None if the marker element never appeared
        """
        html = await self.fetch(url, wait_selector)
        if html is None:
            return None
        return BeautifulSoup(html, 'html.parser')

    async def __aenter__(self):
        """Async context manager entry."""
        await self._init_browser()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self._cleanup()
