"""
Kyero scraper.

Static HTML. Disabled in config: the current card markup no longer
matches these selectors.
"""

from ..base import BaseScraper, ListingRecord
from ..config import get_site_config
from ..utils.extractors import select_text, select_attr


class KyeroScraper(BaseScraper):

    def __init__(self, crawler=None):
        super().__init__(get_site_config('kyero'), crawler)

    def parse_card(self, card) -> ListingRecord:
        main_image = select_attr(card, '.main_image', 'href')
        link_href = select_attr(card, 'a:not(.main_image)', 'href')
        return ListingRecord(
            site=self.config.site,
            images=[self.build_link(main_image)] if main_image else [],
            main_image=self.build_link(main_image),
            link_text=select_text(card, '.title'),
            link_href=link_href,
            link=self.build_link(link_href),
            location=select_text(card, '.location_full'),
            location_details=select_text(card, '.location_details'),
            price=select_text(card, '.price'),
        )
