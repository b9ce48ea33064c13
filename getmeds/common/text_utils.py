"""
Text Utilities

Helper functions for cleaning scraped text and URLs.
"""

import re
from typing import Iterable, Optional
from urllib.parse import urljoin, urlparse


def clean_text(text: Optional[str]) -> str:
    """Collapse runs of whitespace and strip the ends."""
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def absolutize_url(url: Optional[str], origin: str) -> Optional[str]:
    """
    Make a retailer URL absolute.

    Args:
        url: Absolute, protocol-relative or site-relative URL
        origin: Retailer origin (e.g., "https://sopharmacy.bg")

    Returns:
        Absolute URL, or None for empty input
    """
    if not url:
        return None
    url = url.strip()
    if url.startswith(('http://', 'https://')):
        return url
    if url.startswith('//'):
        return 'https:' + url
    return urljoin(origin.rstrip('/') + '/', url.lstrip('/'))


def is_placeholder_image(url: Optional[str], markers: Iterable[str]) -> bool:
    """
    Check if an image URL points at a known placeholder (or is not an image at all).

    Markers are matched against the file name only, so directory names
    and query strings do not trigger them.
    """
    if not url:
        return True
    url_lower = url.lower()
    if url_lower.startswith('data:'):
        return True
    file_name = urlparse(url_lower).path.rsplit('/', 1)[-1]
    return any(marker in file_name for marker in markers)
