"""Shared utilities for scrapers."""

from .normalizers import (
    extract_number,
    clean_label,
)
from .extractors import (
    normalize_link,
    select_text,
    select_attr,
    extract_images,
    extract_tag_info,
)

__all__ = [
    'extract_number',
    'clean_label',
    'normalize_link',
    'select_text',
    'select_attr',
    'extract_images',
    'extract_tag_info',
]
