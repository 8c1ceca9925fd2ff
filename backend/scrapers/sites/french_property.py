"""
French-Property.com scraper.

Static HTML site, the reference implementation for static scrapers.

Site structure:
- Search page: `.main_search .properties .property_listing` cards
- Gallery: `li[itemprop='image']` items with lazy-loaded `img.lazyload`
  and a full-size `meta[itemprop='contentUrl']`
- Figures in dedicated `.info-*` elements
"""

from ..base import BaseScraper, ListingRecord
from ..config import get_site_config
from ..utils.normalizers import clean_label
from ..utils.extractors import select_text, select_attr, extract_images


class FrenchPropertyScraper(BaseScraper):
    """
    Scraper for French-Property.com.

    The anchor text wraps a "Save" button and a currency selector,
    which are stripped from link_text.
    """

    def __init__(self, crawler=None):
        super().__init__(get_site_config('french_property'), crawler)

    def parse_card(self, card) -> ListingRecord:
        images = [self.build_link(src) for src in extract_images(card)]

        main_image = (
            select_attr(card, 'a.main_image', 'href')
            or select_attr(card, 'img.lazyload', 'data-src')
            or (images[0] if images else '')
        )

        link_href = select_attr(card, 'a[rel="nofollow"]', 'href')

        return ListingRecord(
            site=self.config.site,
            images=images,
            main_image=self.build_link(main_image),
            link_text=clean_label(select_text(card, 'a[rel="nofollow"]')),
            link_title=select_attr(card, 'a[rel="nofollow"]', 'title'),
            link_href=link_href,
            link=self.build_link(link_href),
            location=select_text(card, '.location_full'),
            location_details=select_text(card, '.location_details'),
            location_map=select_text(card, '.location_map'),
            price=select_text(card, '.price'),
            info_beds=select_text(card, '.info-beds'),
            info_bath=select_text(card, '.info-bath'),
            info_habitable=select_text(card, '.info-habitable'),
            info_land=select_text(card, '.info-land'),
            description=select_text(card, '.description'),
            ref=select_text(card, '.ref'),
        )
