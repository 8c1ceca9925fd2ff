"""
Scraper system for Immo-Search.

This module provides a unified scraping framework supporting:
- Static HTML sites (httpx + BeautifulSoup)
- JavaScript-rendered sites (Playwright)
"""

from .base import BaseScraper, ScraperType, SiteConfig, ListingRecord, ScrapeResult
from .config import SITES, get_site_config, get_enabled_sites
from .manager import ScraperManager, SCRAPER_REGISTRY

__all__ = [
    'BaseScraper',
    'ScraperType',
    'SiteConfig',
    'ListingRecord',
    'ScrapeResult',
    'SITES',
    'get_site_config',
    'get_enabled_sites',
    'ScraperManager',
    'SCRAPER_REGISTRY',
]
