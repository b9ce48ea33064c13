"""
Search Page Parser

Extracts product references from a retailer search results page:
- Detail link and product ID from the card link
- Name from several fallback label locations
- Thumbnail image (absolutized, placeholders filtered)
- Price from the card price label
"""

import re
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from ...common.constants import UNKNOWN_PRODUCT
from ...common.text_utils import absolutize_url, clean_text, is_placeholder_image
from ...models import ScrapedProductRef
from ...normalization.pricing import parse_price

PLACEHOLDER_IMAGE_MARKERS = (
    'placeholder', 'no-image', 'noimage', 'no_image', 'image-missing', 'missing.',
    'default.jpg', 'default.png', 'spacer.', 'blank.gif',
)


class SearchPageParser:
    """
    Parses product cards from a search page.

    Usage:
        parser = SearchPageParser(origin="https://sopharmacy.bg")
        refs = parser.parse(html, limit=5)
    """

    CARD_SELECTOR = '.products-item'
    LINK_SELECTOR = 'a[href*="/bg/product/"]'
    NAME_SELECTORS = ['.products-item__name', '.product-name', 'h3', 'h4']
    PRICE_SELECTORS = ['.products-item__price', '.price']
    PRODUCT_ID_PATTERN = re.compile(r'/bg/product/(\d+)')

    def __init__(self, origin: str, placeholder_markers: Sequence[str] = PLACEHOLDER_IMAGE_MARKERS):
        self.origin = origin
        self.placeholder_markers = placeholder_markers

    def parse(self, html: str, limit: int = 0) -> List[ScrapedProductRef]:
        """
        Extract product references from search page markup.

        Args:
            html: Search page HTML
            limit: Maximum number of references (0 = no limit)

        Returns:
            Product references in page order
        """
        soup = BeautifulSoup(html or "", "lxml")
        refs = []

        for card in soup.select(self.CARD_SELECTOR):
            ref = self.parse_card(card)
            if ref is None:
                continue
            refs.append(ref)
            if limit and len(refs) >= limit:
                break

        return refs

    def parse_card(self, card: Tag) -> Optional[ScrapedProductRef]:
        """Extract one product reference; cards without a product link are skipped."""
        link = card.select_one(self.LINK_SELECTOR)
        if link is None:
            return None

        href = link.get('href', '')
        match = self.PRODUCT_ID_PATTERN.search(href)
        if not match:
            return None

        return ScrapedProductRef(
            external_id=match.group(1),
            name=self._extract_name(card),
            detail_link=absolutize_url(href, self.origin),
            image_url=self._extract_image(card),
            price=self._extract_price(card),
        )

    def _extract_name(self, card: Tag) -> str:
        for selector in self.NAME_SELECTORS:
            element = card.select_one(selector)
            if element:
                name = clean_text(element.get_text())
                if name:
                    return name
        return UNKNOWN_PRODUCT

    def _extract_image(self, card: Tag) -> Optional[str]:
        img = card.find('img')
        if img is None:
            return None
        src = img.get('src') or img.get('data-src') or img.get('data-lazy')
        url = absolutize_url(src, self.origin)
        if is_placeholder_image(url, self.placeholder_markers):
            return None
        return url

    def _extract_price(self, card: Tag) -> Optional[float]:
        for selector in self.PRICE_SELECTORS:
            element = card.select_one(selector)
            if element:
                price = parse_price(clean_text(element.get_text()))
                if price is not None:
                    return price
        return None
