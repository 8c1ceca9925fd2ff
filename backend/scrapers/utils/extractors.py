"""
Data extraction utilities for scrapers.

These functions pull listing fields out of a parsed listing card.
"""

from typing import Dict, Iterable, List, Optional

from bs4 import Tag

from .normalizers import NON_DIGITS


# Keyword rules for tag lines, checked in order (first match wins)
BEDROOM_KEYWORD = 'bedroom'
BATH_KEYWORD = 'bath'
AREA_UNIT = 'm²'
LAND_KEYWORD = 'land'


def normalize_link(href: Optional[str], base_url: str) -> str:
    """
    Turn a possibly relative link into an absolute URL.

    Examples:
        ("/property/123", "https://example.com") -> https://example.com/property/123
        ("https://other.com/x", "https://example.com") -> https://other.com/x
        ("//cdn.example.com/a.jpg", ...) -> https://cdn.example.com/a.jpg
        ("", ...) -> ""
    """
    href = (href or '').strip()
    if not href:
        return ''
    if href.startswith(('http://', 'https://')):
        return href
    if href.startswith('//'):
        return f"https:{href}"
    return f"{base_url.rstrip('/')}/{href.lstrip('/')}"


def select_text(card: Tag, selector: str) -> str:
    """Stripped text of the first element matching selector, or ''."""
    element = card.select_one(selector)
    if element is None:
        return ''
    return element.get_text(strip=True)


def select_attr(card: Tag, selector: str, attr: str) -> str:
    """Stripped attribute of the first element matching selector, or ''."""
    element = card.select_one(selector)
    if element is None:
        return ''
    value = element.get(attr) or ''
    if isinstance(value, list):
        value = ' '.join(value)
    return value.strip()


def extract_images(
    card: Tag,
    item_selector: str = "li[itemprop='image']",
    img_selector: str = 'img.lazyload',
    meta_selector: str = 'meta[itemprop="contentUrl"]',
) -> List[str]:
    """
    Collect image URLs from a gallery of lazy-loaded images.

    For every gallery item the deferred `data-src` is preferred over `src`.
    A full-size URL from embedded metadata is appended after it when present.

    Args:
        card: Listing card element
        item_selector: CSS selector of one gallery item
        img_selector: CSS selector of the image inside the item
        meta_selector: CSS selector of the metadata tag holding the full-size URL

    Returns:
        List of image URLs in document order
    """
    images = []
    for item in card.select(item_selector):
        data_src = select_attr(item, img_selector, 'data-src')
        src = select_attr(item, img_selector, 'src')
        full_size = select_attr(item, meta_selector, 'content')

        if data_src:
            images.append(data_src)
        elif src:
            images.append(src)
        if full_size:
            images.append(full_size)
    return images


def extract_tag_info(tags: Iterable[str]) -> Dict[str, str]:
    """
    Classify tag-line texts into bedroom/bathroom/area/land counts.

    Each text is lower-cased and matched by keyword; the digits it contains
    become the value as written ("0", "03"), or '' when it has none.
    Unmatched tags are ignored.

    Examples:
        ["3 bedrooms", "2 bathrooms", "120 m²", "Land 800 m²"]
            -> {'info_beds': '3', 'info_bath': '2',
                'info_habitable': '120', 'info_land': '800'}
    """
    info = {
        'info_beds': '',
        'info_bath': '',
        'info_habitable': '',
        'info_land': '',
    }
    for tag in tags:
        text = (tag or '').strip().lower()
        value = NON_DIGITS.sub('', text)

        if BEDROOM_KEYWORD in text:
            info['info_beds'] = value
        elif BATH_KEYWORD in text:
            info['info_bath'] = value
        elif AREA_UNIT in text and LAND_KEYWORD not in text:
            info['info_habitable'] = value
        elif LAND_KEYWORD in text:
            info['info_land'] = value
    return info
