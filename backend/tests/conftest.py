"""
Pytest configuration and fixtures for Immo-Search tests.
"""

import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from api.main import app, get_scraper_manager
from scrapers.base import ListingRecord
from scrapers.manager import ScraperManager


FRENCH_PROPERTY_HTML = """
<html><body>
<div class="main_search">
  <div class="properties">
    <div class="property_listing">
      <a class="main_image" href="/images/full/1001.jpg"></a>
      <ul>
        <li itemprop="image">
          <img class="lazyload" data-src="https://cdn.french-property.com/1001-a.jpg" src="/placeholder.gif">
          <meta itemprop="contentUrl" content="https://cdn.french-property.com/1001-a-full.jpg">
        </li>
        <li itemprop="image">
          <img class="lazyload" src="https://cdn.french-property.com/1001-b.jpg">
        </li>
      </ul>
      <a rel="nofollow" href="/properties/1001/stone-house" title="Stone house in Dordogne">Save Stone house with pool French Property Currency</a>
      <div class="location_full">Dordogne, Nouvelle-Aquitaine</div>
      <div class="location_details">Near Bergerac</div>
      <div class="location_map">24100</div>
      <div class="price">€300,000</div>
      <span class="info-beds">4 beds</span>
      <span class="info-bath">2 baths</span>
      <span class="info-habitable">180 m²</span>
      <span class="info-land">2,500 m²</span>
      <p class="description">Renovated stone house.</p>
      <span class="ref">Ref: FP-1001</span>
    </div>
    <div class="property_listing"></div>
  </div>
</div>
</body></html>
"""

SELOGER_HTML = """
<html><body>
<div data-testid="sl.explore.card-container">
  <div data-testid="sl.explore.PhotosContainer">
    <img src="https://v.seloger.com/s/1.jpg">
    <img src="https://v.seloger.com/s/2.jpg">
    <img>
  </div>
  <a data-testid="sl.explore.coveringLink" href="/annonces/achat/maison/paris-15eme-75/123.htm" title="Maison 5 pièces"></a>
  <div data-test="sl.title">Maison</div>
  <div data-test="sl.address">Paris 15ème (75015)</div>
  <div data-test="sl.price-label">850 000 €</div>
  <div data-testid="sl.explore.card-description">Belle maison familiale</div>
  <ul data-test="sl.tagsLine">
    <li>5 pièces</li>
    <li>3 bedrooms</li>
    <li>2 Baths</li>
    <li>140 m²</li>
    <li>Land 600 m²</li>
  </ul>
</div>
<div data-testid="sl.explore.card-container">
  <a data-testid="sl.explore.coveringLink" href="https://www.seloger.com/annonces/456.htm"></a>
</div>
</body></html>
"""

LEBONCOIN_HTML = """
<html><body>
<div class="card-annonce-liste">
  <a href="/annonce/789"><span class="annonce-title">Appartement T3</span></a>
  <span class="annonce-price">210 000 €</span>
  <span class="annonce-geo">Lyon 7e</span>
</div>
</body></html>
"""

KYERO_HTML = """
<html><body>
<article class="property-card">
  <a class="main_image" href="https://images.kyero.com/42.jpg"></a>
  <a href="/fr/property/42-villa"><span class="title">Villa in Nice</span></a>
  <span class="location_full">Nice, Alpes-Maritimes</span>
  <span class="location_details">Sea view</span>
  <span class="price">€1,200,000</span>
</article>
</body></html>
"""


# ============================================================
# Fake adapters for aggregation tests
# ============================================================

class FakeScraper:
    """Adapter returning `count` records after `delay` seconds, or raising `error`."""

    def __init__(self, site: str, count: int = 0, error: Exception = None, delay: float = 0.0):
        self.site = site
        self.count = count
        self.error = error
        self.delay = delay

    async def fetch_listings(self):
        await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return [ListingRecord(site=self.site, link_text=f"{self.site} #{i}") for i in range(self.count)]


def make_registry(*scrapers):
    """Ordered registry of factories for the given fake adapters."""
    return {scraper.site: (lambda s=scraper: s) for scraper in scrapers}


# ============================================================
# Fake Playwright for browser tests
# ============================================================

class FakeResponse:
    def __init__(self, status: int):
        self.status = status


class FakePage:
    def __init__(self, harness):
        self.harness = harness

    async def goto(self, url, wait_until=None, timeout=None):
        self.harness.visited.append({'url': url, 'wait_until': wait_until, 'timeout': timeout})
        if self.harness.goto_error:
            raise self.harness.goto_error
        return FakeResponse(self.harness.status)

    async def wait_for_selector(self, selector, state=None, timeout=None):
        self.harness.waited_for.append(selector)
        if not self.harness.marker_present:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    async def content(self):
        return self.harness.html

    async def close(self):
        self.harness.open_pages -= 1


class FakeContext:
    def __init__(self, harness):
        self.harness = harness

    async def add_init_script(self, script):
        self.harness.init_scripts.append(script)

    async def new_page(self):
        self.harness.open_pages += 1
        return FakePage(self.harness)

    async def close(self):
        self.harness.context_open = False


class FakeBrowser:
    def __init__(self, harness):
        self.harness = harness

    async def new_context(self, **kwargs):
        self.harness.context_kwargs = kwargs
        self.harness.context_open = True
        return FakeContext(self.harness)

    async def close(self):
        self.harness.browser_open = False


class FakeChromium:
    def __init__(self, harness):
        self.harness = harness

    async def launch(self, **kwargs):
        await asyncio.sleep(self.harness.launch_delay)
        self.harness.launches += 1
        self.harness.browser_open = True
        return FakeBrowser(self.harness)


class FakePlaywrightHarness:
    """
    Stands in for `async_playwright` and records the browser lifecycle.

    Passed as `playwright_factory`: calling it returns an object whose
    `start()` yields the fake Playwright driver (this harness).
    """

    def __init__(self, html: str = "<html></html>", marker_present: bool = True,
                 status: int = 200, goto_error: Exception = None, launch_delay: float = 0.0):
        self.html = html
        self.launch_delay = launch_delay
        self.marker_present = marker_present
        self.status = status
        self.goto_error = goto_error

        self.chromium = FakeChromium(self)
        self.running = False
        self.browser_open = False
        self.context_open = False
        self.open_pages = 0
        self.launches = 0
        self.context_kwargs = None
        self.init_scripts = []
        self.visited = []
        self.waited_for = []

    def __call__(self):
        return self

    async def start(self):
        self.running = True
        return self

    async def stop(self):
        self.running = False

    @property
    def is_clean(self) -> bool:
        """Nothing left open: no driver, browser, context or page."""
        return not (self.running or self.browser_open or self.context_open or self.open_pages)


def mock_transport(html: str = "", status: int = 200, error: Exception = None):
    """httpx transport serving one canned response for every request."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if error:
            raise error
        return httpx.Response(status, text=html)

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport


# ============================================================
# Fixtures
# ============================================================

@pytest.fixture
def fake_browser():
    """A fake Playwright whose pages render nothing until configured."""
    return FakePlaywrightHarness()


@pytest.fixture(scope="function")
def client():
    """Create a test client; tests install their own manager override."""
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_registry():
    """Route /api/scrape to a manager built from the given fake adapters."""
    def install(*scrapers):
        registry = make_registry(*scrapers)
        app.dependency_overrides[get_scraper_manager] = lambda: ScraperManager(registry=registry, timeout=5)
        return registry
    return install
