"""
SeLoger.com scraper.

This site renders its result cards with JavaScript, so it is fetched with
the headless browser and only parsed once the first card container exists.

Site structure:
- Cards: `div[data-testid="sl.explore.card-container"]`
- Photos: `div[data-testid="sl.explore.PhotosContainer"] img`
- Figures: one `li` per fact in `ul[data-test="sl.tagsLine"]`
  ("3 bedrooms", "2 baths", "95 m²", "land 400 m²")
"""

from ..base import BaseScraper, ListingRecord
from ..config import get_site_config
from ..utils.extractors import select_text, select_attr, extract_tag_info


class SeLogerScraper(BaseScraper):
    """Scraper for SeLoger.com (no location details, map or reference on cards)."""

    def __init__(self, crawler=None):
        super().__init__(get_site_config('seloger'), crawler)

    def parse_card(self, card) -> ListingRecord:
        images = []
        for img in card.select('div[data-testid="sl.explore.PhotosContainer"] img'):
            src = (img.get('src') or '').strip()
            if src:
                images.append(self.build_link(src))

        link_href = select_attr(card, 'a[data-testid="sl.explore.coveringLink"]', 'href')

        tags = [li.get_text(strip=True) for li in card.select('ul[data-test="sl.tagsLine"] li')]
        info = extract_tag_info(tags)

        return ListingRecord(
            site=self.config.site,
            images=images,
            main_image=images[0] if images else '',
            link_text=select_text(card, 'div[data-test="sl.title"]'),
            link_title=select_attr(card, 'a[data-testid="sl.explore.coveringLink"]', 'title'),
            link_href=link_href,
            link=self.build_link(link_href),
            location=select_text(card, 'div[data-test="sl.address"]'),
            price=select_text(card, 'div[data-test="sl.price-label"]'),
            description=select_text(card, 'div[data-testid="sl.explore.card-description"]'),
            **info,
        )
