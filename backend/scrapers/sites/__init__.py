"""Per-site scraper implementations."""

from .french_property import FrenchPropertyScraper
from .seloger import SeLogerScraper
from .leboncoin import LeboncoinScraper
from .kyero import KyeroScraper

__all__ = ['FrenchPropertyScraper', 'SeLogerScraper', 'LeboncoinScraper', 'KyeroScraper']
