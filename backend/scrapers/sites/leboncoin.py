"""
Leboncoin real-estate scraper.

The page is rendered in the browser; its cards use the EntreParticuliers
markup, so records are labelled and linked as EntreParticuliers.
"""

from ..base import BaseScraper, ListingRecord
from ..config import get_site_config
from ..utils.extractors import select_text, select_attr


class LeboncoinScraper(BaseScraper):

    def __init__(self, crawler=None):
        super().__init__(get_site_config('leboncoin'), crawler)

    def parse_card(self, card) -> ListingRecord:
        link_href = select_attr(card, 'a', 'href')
        return ListingRecord(
            site=self.config.site,
            link_text=select_text(card, '.annonce-title'),
            link_href=link_href,
            link=self.build_link(link_href),
            location=select_text(card, '.annonce-geo'),
            price=select_text(card, '.annonce-price'),
        )
