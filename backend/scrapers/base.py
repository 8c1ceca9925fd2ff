"""
Base classes for the scraper system.

This module defines the abstract base class and data structures
used by all site-specific scrapers.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field, asdict
from enum import Enum
from datetime import datetime
import logging

from bs4 import BeautifulSoup

from .utils.extractors import normalize_link

logger = logging.getLogger(__name__)

# ANSI color codes for terminal output
class Colors:
    """ANSI color codes for colorized logging."""
    RESET = '\033[0m'
    BOLD = '\033[1m'

    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'

    @staticmethod
    def green(text):
        return f"{Colors.GREEN}{text}{Colors.RESET}"

    @staticmethod
    def yellow(text):
        return f"{Colors.YELLOW}{text}{Colors.RESET}"

    @staticmethod
    def red(text):
        return f"{Colors.RED}{text}{Colors.RESET}"

    @staticmethod
    def bold(text):
        return f"{Colors.BOLD}{text}{Colors.RESET}"


class ScraperType(Enum):
    """Types of scrapers based on site requirements."""
    STATIC = "static"           # httpx + BeautifulSoup (fast)
    JAVASCRIPT = "javascript"   # Playwright (JS rendering)


@dataclass
class SiteConfig:
    """Configuration for a scraping source."""
    key: str                            # Registry identifier (e.g., 'seloger')
    site: str                           # Label written to every record
    listing_url: str                    # Search results page
    base_url: str                       # Origin for resolving relative links
    scraper_type: ScraperType           # Which crawler to use
    card_selector: str                  # CSS selector of one listing card
    marker_selector: Optional[str] = None  # Element signalling rendered content
    request_timeout: float = 30.0       # Static HTTP timeout
    navigation_timeout: float = 60.0    # Browser navigation / network idle
    marker_timeout: float = 60.0        # Browser marker wait
    enabled: bool = True                # Whether to include in aggregation


@dataclass
class ListingRecord:
    """Standardized listing data after scraping. Absent fields are empty strings."""
    site: str

    # Media
    images: List[str] = field(default_factory=list)
    main_image: str = ''

    # Detail page anchor
    link_text: str = ''
    link_title: str = ''
    link_href: str = ''
    link: str = ''

    # Location
    location: str = ''
    location_details: str = ''
    location_map: str = ''

    # Free-text figures, parsed downstream
    price: str = ''
    info_beds: str = ''
    info_bath: str = ''
    info_habitable: str = ''
    info_land: str = ''

    description: str = ''
    ref: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ScrapeResult:
    """Result of one adapter run within an aggregation."""
    source: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    total: int = 0
    errors: int = 0
    error_details: List[Dict] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.errors == 0

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at and self.started_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> Dict:
        return {
            'source': self.source,
            'started_at': self.started_at.isoformat(),
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'duration_seconds': self.duration_seconds,
            'total': self.total,
            'errors': self.errors,
            'error_details': self.error_details[:10],  # Limit error details
            'success': self.success,
        }


class BaseScraper(ABC):
    """
    Abstract base class for all site scrapers.

    Subclasses must implement:
    - parse_card(): Turn one listing card into a ListingRecord

    Optional overrides:
    - create_crawler(): Custom crawler setup
    - parse_listings(): Custom card discovery
    """

    def __init__(self, config: SiteConfig, crawler=None):
        """
        Initialize the scraper.

        Args:
            config: Site configuration
            crawler: Crawler to use instead of the one matching config.scraper_type
        """
        self.config = config
        self.crawler = crawler or self.create_crawler()
        # Child loggers of 'scraper' use the handlers configured in api.main
        self.logger = logging.getLogger(f"scraper.{config.key}")

    def create_crawler(self):
        """Build the crawler matching the site's retrieval strategy."""
        from .crawlers.static import StaticCrawler
        from .crawlers.browser import BrowserCrawler

        if self.config.scraper_type == ScraperType.JAVASCRIPT:
            return BrowserCrawler(
                navigation_timeout=self.config.navigation_timeout,
                marker_timeout=self.config.marker_timeout,
            )
        return StaticCrawler(timeout=self.config.request_timeout)

    def build_link(self, href: Optional[str]) -> str:
        """Resolve a link found on this site to an absolute URL."""
        return normalize_link(href, self.config.base_url)

    async def fetch_page(self) -> Optional[BeautifulSoup]:
        """
        Fetch and parse the listing page.

        The crawler is entered for this call only, so its client or browser
        session is released on every exit path.

        Returns:
            BeautifulSoup of the page, or None if rendered content never became ready
        """
        async with self.crawler as crawler:
            if self.config.scraper_type == ScraperType.JAVASCRIPT:
                return await crawler.fetch_soup(
                    self.config.listing_url,
                    wait_selector=self.config.marker_selector,
                )
            return await crawler.fetch_soup(self.config.listing_url)

    def parse_listings(self, soup: BeautifulSoup) -> List[ListingRecord]:
        """Parse every listing card on the page, in document order."""
        cards = soup.select(self.config.card_selector)
        self.logger.debug(f"Found {len(cards)} card containers")
        return [self.parse_card(card) for card in cards]

    @abstractmethod
    def parse_card(self, card) -> ListingRecord:
        """
        Extract one listing card.

        Args:
            card: BeautifulSoup element matching config.card_selector

        Returns:
            ListingRecord (emitted even when no field could be extracted)
        """
        pass

    async def fetch_listings(self) -> List[ListingRecord]:
        """
        Main entry point - fetch the listing page and extract all records.

        Never raises: network errors, timeouts and parse errors are logged
        and produce an empty list.
        """
        self.logger.info(f"Fetching {self.config.site} from {self.config.listing_url}")

        try:
            soup = await self.fetch_page()
            if soup is None:
                self.logger.warning(f"{Colors.yellow('[SKIP]')} {self.config.site}: content never became ready")
                return []
            records = self.parse_listings(soup)

        except Exception as e:
            self.logger.error(f"{Colors.red('[ERR]')} {self.config.site}: {type(e).__name__}: {e}")
            return []

        self.logger.info(f"{Colors.green('[OK]')} {self.config.site}: {len(records)} listings")
        return records
