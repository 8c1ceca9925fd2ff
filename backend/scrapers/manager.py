"""
Scraper Manager - orchestrates all site scrapers.

Runs every registered scraper concurrently and merges their listings
into one list, in registration order. A failing or slow source only
removes its own listings from the result.
"""

import asyncio
from typing import Callable, Dict, List, Optional
from datetime import datetime, timezone
import logging

from .base import BaseScraper, ListingRecord, ScrapeResult, Colors
from .config import SITES, get_enabled_sites

# Import all implemented scrapers
from .sites.french_property import FrenchPropertyScraper
from .sites.seloger import SeLogerScraper
from .sites.leboncoin import LeboncoinScraper
from .sites.kyero import KyeroScraper

logger = logging.getLogger(__name__)


# Registry of implemented scrapers, in aggregation order
SCRAPER_REGISTRY: Dict[str, Callable[[], BaseScraper]] = {
    'french_property': FrenchPropertyScraper,
    'seloger': SeLogerScraper,
    'leboncoin': LeboncoinScraper,
    'kyero': KyeroScraper,
}


def get_active_registry() -> Dict[str, Callable[[], BaseScraper]]:
    """Registered scrapers whose site is enabled, in registration order."""
    enabled = get_enabled_sites()
    return {k: v for k, v in SCRAPER_REGISTRY.items() if k in enabled}


class ScraperManager:
    """
    Manages and orchestrates all site scrapers.

    Usage:
        manager = ScraperManager(timeout=150)

        # Run all enabled scrapers and merge their listings
        listings = await manager.aggregate()

        # Per-source outcome of that call
        summary = manager.get_results_summary()
    """

    def __init__(
        self,
        registry: Optional[Dict[str, Callable[[], BaseScraper]]] = None,
        timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None,
    ):
        """
        Initialize the scraper manager.

        Args:
            registry: Ordered mapping of key -> scraper factory (defaults to enabled sites)
            timeout: Upper bound in seconds for one scraper run (None = no bound)
            max_concurrency: Max scrapers running at once (defaults to all)
        """
        self.registry = registry if registry is not None else get_active_registry()
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self.results: Dict[str, ScrapeResult] = {}

    def _record_failure(self, site_key: str, result: ScrapeResult, error: str):
        result.errors += 1
        result.error_details.append({'error': error})
        result.completed_at = datetime.now(timezone.utc)
        self.results[site_key] = result

    async def _run_scraper(self, site_key: str, semaphore: asyncio.Semaphore) -> List[ListingRecord]:
        """Run one scraper in isolation; any failure becomes an empty list."""
        async with semaphore:
            result = ScrapeResult(source=site_key, started_at=datetime.now(timezone.utc))
            try:
                scraper = self.registry[site_key]()
                records = await asyncio.wait_for(scraper.fetch_listings(), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.error(f"Scraper {site_key} timed out after {self.timeout}s")
                self._record_failure(site_key, result, f'Timed out after {self.timeout}s')
                return []
            except Exception as e:
                logger.error(f"Scraper failed for {site_key}: {e}")
                self._record_failure(site_key, result, str(e))
                return []

            records = list(records or [])
            result.total = len(records)
            result.completed_at = datetime.now(timezone.utc)
            self.results[site_key] = result
            return records

    async def aggregate(self) -> List[ListingRecord]:
        """
        Run all registered scrapers concurrently and merge their listings.

        Returns:
            Listings of every scraper, concatenated in registration order
        """
        self.results = {}
        site_keys = list(self.registry.keys())
        logger.info(f"Starting aggregation for {len(site_keys)} sites: {site_keys}")

        semaphore = asyncio.Semaphore(self.max_concurrency or max(len(site_keys), 1))
        tasks = [self._run_scraper(key, semaphore) for key in site_keys]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        combined: List[ListingRecord] = []
        for key, outcome in zip(site_keys, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Scraper {key} raised past its guard: {outcome!r}")
                self._record_failure(
                    key,
                    ScrapeResult(source=key, started_at=datetime.now(timezone.utc)),
                    str(outcome),
                )
                continue
            combined.extend(outcome)

        summary = self.get_results_summary()
        failed = f"{summary['failed']} failed"
        if summary['failed']:
            failed = Colors.red(failed)
        logger.info(
            f"{Colors.bold('Aggregation complete')}: {len(combined)} listings from "
            f"{summary['successful']}/{summary['total_sites']} sites ({failed})"
        )
        return combined

    def list_scrapers(self) -> List[Dict]:
        """
        List all configured sites and their implementation status.

        Returns:
            List of site info dictionaries
        """
        scrapers = []
        for key, config in SITES.items():
            scrapers.append({
                'key': key,
                'site': config.site,
                'type': config.scraper_type.value,
                'enabled': config.enabled,
                'implemented': key in SCRAPER_REGISTRY,
                'url': config.listing_url,
            })
        return scrapers

    def get_implemented_scrapers(self) -> List[str]:
        """Get list of implemented scraper keys."""
        return list(SCRAPER_REGISTRY.keys())

    def get_results_summary(self) -> Dict:
        """
        Get summary of the last aggregation.

        Returns:
            Summary dictionary with totals
        """
        if not self.results:
            return {
                'total_sites': 0,
                'successful': 0,
                'failed': 0,
                'total_listings': 0,
            }

        successful = sum(1 for r in self.results.values() if r.success)
        failed = len(self.results) - successful

        return {
            'total_sites': len(self.results),
            'successful': successful,
            'failed': failed,
            'total_listings': sum(r.total for r in self.results.values()),
            'sites': {k: v.to_dict() for k, v in self.results.items()},
        }
