"""
Data normalization utilities for scrapers.

These functions standardize scraped text into consistent values.
They never raise: malformed input degrades to 0 or to the trimmed input.
"""

import re
from typing import Optional


NON_DIGITS = re.compile(r'[^0-9]+')

# French-Property anchors render a "Save" favourite button before the title
# and a currency selector after it.
LABEL_PREFIX = 'Save'
LABEL_SUFFIX = 'French Property Currency'


def extract_number(text: Optional[str]) -> int:
    """
    Keep only the digit characters of text and return them as an integer.

    Examples:
        €300,000 -> 300000
        120 m² -> 120
        3 bedrooms -> 3
        no data -> 0
    """
    if not text:
        return 0
    digits = NON_DIGITS.sub('', text)
    if not digits:
        return 0
    return int(digits)


def _strip_label_once(text: str) -> str:
    result = text.strip()
    if result.startswith(LABEL_PREFIX):
        result = result[len(LABEL_PREFIX):].strip()
    if result.endswith(LABEL_SUFFIX):
        result = result[:-len(LABEL_SUFFIX)].strip()
    return result


def clean_label(text: Optional[str]) -> str:
    """
    Remove the "Save" marker and the trailing currency boilerplate.

    Examples:
        Save Stone house with pool French Property Currency -> Stone house with pool
        Village house -> Village house
    """
    if not text:
        return ''
    result = text.strip()
    while True:
        stripped = _strip_label_once(result)
        if stripped == result:
            return result
        result = stripped
