"""
Site configurations for all property listing sources.

Each site has a SiteConfig that defines:
- The search results URL and the origin used to resolve links
- Scraper type (static or javascript)
- Card and marker selectors, timeouts
"""

from .base import SiteConfig, ScraperType


# ============================================================
# SITE CONFIGURATIONS
# Order here is the order records appear in aggregated results.
# ============================================================

SITES = {
    # ========== STATIC ==========
    # httpx + BeautifulSoup - fast, no JS needed

    'french_property': SiteConfig(
        key='french_property',
        site='French-Property.com',
        listing_url='https://www.french-property.com/properties-for-sale?sort_by=date&sort_direction=desc&page_size=50',
        base_url='https://www.french-property.com',
        scraper_type=ScraperType.STATIC,
        card_selector='.main_search .properties .property_listing',
        enabled=True,
    ),

    # ========== JAVASCRIPT ==========
    # Playwright - need JS rendering

    'seloger': SiteConfig(
        key='seloger',
        site='SeLoger.com',
        listing_url=(
            'https://www.seloger.com/list.htm?projects=2,5&types=2,1&natures=1,2,4'
            '&places=[{%22divisions%22:[2238]}]&mandatorycommodities=0&enterprise=0'
            '&qsVersion=1.0&m=homepage_buy-redirection-search_results'
        ),
        base_url='https://www.seloger.com',
        scraper_type=ScraperType.JAVASCRIPT,
        card_selector='div[data-testid="sl.explore.card-container"]',
        marker_selector='div[data-testid="sl.explore.card-container"]',
        navigation_timeout=60.0,
        marker_timeout=60.0,
        enabled=True,
    ),

    # Cards carry EntreParticuliers markup and links
    'leboncoin': SiteConfig(
        key='leboncoin',
        site='EntreParticuliers',
        listing_url='https://www.leboncoin.fr/c/ventes_immobilieres',
        base_url='https://www.entreparticuliers.com',
        scraper_type=ScraperType.JAVASCRIPT,
        card_selector='.card-annonce-liste',
        marker_selector='.card-annonce-liste',
        enabled=True,
    ),

    # ========== DISABLED ==========

    'kyero': SiteConfig(
        key='kyero',
        site='Kyero',
        listing_url='https://www.kyero.com/fr/immobilier-a-vendre-en-france',
        base_url='https://www.kyero.com',
        scraper_type=ScraperType.STATIC,
        card_selector='article.property-card',
        enabled=False,  # Card markup no longer matches, yields nothing
    ),
}


# ============================================================
# HELPER FUNCTIONS
# ============================================================

def get_site_config(site_key: str) -> SiteConfig:
    """
    Get configuration for a site by its key.

    Args:
        site_key: Site identifier (e.g., 'seloger', 'french_property')

    Returns:
        SiteConfig for the site

    Raises:
        ValueError: If site_key is not found
    """
    if site_key not in SITES:
        valid_keys = ', '.join(sorted(SITES.keys()))
        raise ValueError(f"Unknown site: '{site_key}'. Valid sites: {valid_keys}")
    return SITES[site_key]


def get_sites_by_type(scraper_type: ScraperType) -> dict:
    """Get all sites of a specific scraper type."""
    return {k: v for k, v in SITES.items() if v.scraper_type == scraper_type}


def get_enabled_sites() -> dict:
    """Get all enabled sites."""
    return {k: v for k, v in SITES.items() if v.enabled}


def get_site_summary() -> list:
    """Get a summary of all sites for display."""
    summary = []
    for key, config in SITES.items():
        summary.append({
            'key': key,
            'site': config.site,
            'type': config.scraper_type.value,
            'enabled': config.enabled,
            'url': config.listing_url,
        })
    return summary
