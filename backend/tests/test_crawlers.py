"""
Tests for the static and browser crawlers.
"""

import asyncio

import httpx
import pytest

from conftest import FakePlaywrightHarness, mock_transport
from scrapers.crawlers.static import StaticCrawler
from scrapers.crawlers.browser import BrowserCrawler


class TestStaticCrawler:
    """Test the httpx-based crawler."""

    def test_fetch_soup(self):
        transport = mock_transport("<html><body><p class='x'>hello</p></body></html>")

        async def run():
            async with StaticCrawler(transport=transport) as crawler:
                return await crawler.fetch_soup("https://example.com/list")

        soup = asyncio.run(run())
        assert soup.select_one('p.x').get_text() == "hello"

    def test_client_closed_after_block(self):
        crawler = StaticCrawler(transport=mock_transport("<html></html>"))

        async def run():
            async with crawler:
                await crawler.fetch("https://example.com/")
                assert crawler._client is not None

        asyncio.run(run())
        assert crawler._client is None

    def test_error_status_with_page_content_is_kept(self):
        page = "<html><body>" + "x" * 2000 + "</body></html>"
        transport = mock_transport(page, status=500)

        async def run():
            async with StaticCrawler(transport=transport) as crawler:
                return await crawler.fetch("https://example.com/")

        assert asyncio.run(run()) == page

    def test_error_status_raises(self):
        transport = mock_transport("Forbidden", status=403)

        async def run():
            async with StaticCrawler(transport=transport) as crawler:
                return await crawler.fetch("https://example.com/")

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(run())


class TestBrowserCrawler:
    """Test the Playwright crawler against a fake browser."""

    def test_returns_rendered_html(self):
        harness = FakePlaywrightHarness(html="<html><div class='card'>1</div></html>")

        async def run():
            async with BrowserCrawler(playwright_factory=harness) as crawler:
                return await crawler.fetch("https://example.com/", wait_selector='.card')

        assert asyncio.run(run()) == "<html><div class='card'>1</div></html>"
        assert harness.waited_for == ['.card']
        assert harness.is_clean

    def test_sets_user_agent_and_hides_webdriver(self):
        harness = FakePlaywrightHarness()

        async def run():
            async with BrowserCrawler(playwright_factory=harness, user_agent="TestAgent/1.0"):
                pass

        asyncio.run(run())
        assert harness.context_kwargs['user_agent'] == "TestAgent/1.0"
        assert any('webdriver' in script for script in harness.init_scripts)

    def test_timeouts_in_milliseconds(self):
        harness = FakePlaywrightHarness()

        async def run():
            async with BrowserCrawler(navigation_timeout=5, playwright_factory=harness) as crawler:
                await crawler.fetch("https://example.com/")

        asyncio.run(run())
        assert harness.visited[0]['timeout'] == 5000

    def test_missing_marker_returns_none(self):
        harness = FakePlaywrightHarness(marker_present=False)
        crawler = BrowserCrawler(playwright_factory=harness)

        async def run():
            async with crawler:
                return await crawler.fetch_soup("https://example.com/", wait_selector='.card')

        assert asyncio.run(run()) is None
        assert harness.is_clean
        assert not crawler.is_open

    def test_session_released_when_block_raises(self):
        harness = FakePlaywrightHarness()
        crawler = BrowserCrawler(playwright_factory=harness)

        async def run():
            async with crawler:
                raise ValueError("parse failure")

        with pytest.raises(ValueError):
            asyncio.run(run())
        assert harness.is_clean
        assert not crawler.is_open

    def test_fetch_outside_block_raises(self):
        crawler = BrowserCrawler(playwright_factory=FakePlaywrightHarness())

        with pytest.raises(RuntimeError):
            asyncio.run(crawler.fetch("https://example.com/"))

    def test_each_block_gets_a_fresh_browser(self):
        harness = FakePlaywrightHarness()
        crawler = BrowserCrawler(playwright_factory=harness)

        async def run():
            for _ in range(2):
                async with crawler:
                    await crawler.fetch("https://example.com/")

        asyncio.run(run())
        assert harness.launches == 2
        assert harness.is_clean

    def test_session_released_when_startup_is_cancelled(self):
        """Test that a timeout during launch still stops the driver."""
        harness = FakePlaywrightHarness(launch_delay=5.0)
        crawler = BrowserCrawler(playwright_factory=harness)

        async def run():
            async with crawler:
                await crawler.fetch("https://example.com/")

        async def bounded():
            await asyncio.wait_for(run(), timeout=0.1)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(bounded())
        assert harness.is_clean
        assert not crawler.is_open
        assert harness.visited == []
