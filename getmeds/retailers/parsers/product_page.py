"""
Product Image Parser

Finds the primary image on a product detail page, in priority order:
1. Open Graph image (meta property="og:image")
2. Twitter card image (meta name="twitter:image")
3. In-page product image element
"""

from typing import Optional, Sequence

from bs4 import BeautifulSoup

from ...common.text_utils import absolutize_url, is_placeholder_image
from .search_page import PLACEHOLDER_IMAGE_MARKERS


class ProductImageParser:
    """Extracts the best product image URL from a detail page."""

    META_SELECTORS = [
        'meta[property="og:image"]',
        'meta[name="twitter:image"]',
        'meta[property="twitter:image"]',
    ]
    IMAGE_SELECTORS = [
        '.product-image img',
        '.product-detail__image img',
        '.pdp-image img',
    ]

    def __init__(self, origin: str, placeholder_markers: Sequence[str] = PLACEHOLDER_IMAGE_MARKERS):
        self.origin = origin
        self.placeholder_markers = placeholder_markers

    def parse(self, html: str) -> Optional[str]:
        """
        Extract the product image URL.

        Args:
            html: Product page HTML

        Returns:
            Absolute image URL, or None when no usable image was found
        """
        soup = BeautifulSoup(html or "", "lxml")

        for selector in self.META_SELECTORS:
            meta = soup.select_one(selector)
            if meta:
                url = self._usable(meta.get('content'))
                if url:
                    return url

        for selector in self.IMAGE_SELECTORS:
            img = soup.select_one(selector)
            if img:
                url = self._usable(img.get('src') or img.get('data-src'))
                if url:
                    return url

        return None

    def _usable(self, src: Optional[str]) -> Optional[str]:
        url = absolutize_url(src, self.origin)
        if is_placeholder_image(url, self.placeholder_markers):
            return None
        return url
