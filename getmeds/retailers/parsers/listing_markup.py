"""
Listing Markup Parser

Generic extraction of product items from raw markup fragments returned
by AJAX search endpoints. The retailer's markup is not stable, so every
field is tried against several fallback selectors.
"""

from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ...common.text_utils import absolutize_url, clean_text
from ...normalization.pricing import parse_price


@dataclass(frozen=True)
class ListingItem:
    """Product item found in a markup fragment."""
    name: str
    price: Optional[float] = None
    link: Optional[str] = None
    image_url: Optional[str] = None


class ListingMarkupParser:
    """
    Parses product items from an HTML fragment.

    Items without a name are skipped. Nested candidates (e.g. a
    [data-product-id] element inside a .product-item) count once.
    """

    ITEM_SELECTOR = '.product-item, .search-result-item, [data-product-id]'
    NAME_SELECTORS = ['.product-name', 'h3', 'h4', '.name']
    PRICE_SELECTORS = ['.price', '.product-price']
    LINK_SELECTOR = 'a[href*="/product/"], a[href*="/products/"]'

    def __init__(self, origin: str):
        self.origin = origin

    def parse(self, html: str) -> List[ListingItem]:
        soup = BeautifulSoup(html or "", "lxml")
        candidates = soup.select(self.ITEM_SELECTOR)
        candidate_ids = {id(c) for c in candidates}

        items = []
        for candidate in candidates:
            if any(id(parent) in candidate_ids for parent in candidate.parents):
                continue
            item = self.parse_item(candidate)
            if item is not None:
                items.append(item)
        return items

    def parse_item(self, element: Tag) -> Optional[ListingItem]:
        name = self._first_text(element, self.NAME_SELECTORS)
        if not name:
            return None

        price_text = self._first_text(element, self.PRICE_SELECTORS)
        link = element.select_one(self.LINK_SELECTOR)
        img = element.find('img')

        return ListingItem(
            name=name,
            price=parse_price(price_text) if price_text else None,
            link=absolutize_url(link.get('href'), self.origin) if link else None,
            image_url=absolutize_url(img.get('src') or img.get('data-src'), self.origin) if img else None,
        )

    @staticmethod
    def _first_text(element: Tag, selectors: List[str]) -> str:
        for selector in selectors:
            found = element.select_one(selector)
            if found:
                text = clean_text(found.get_text())
                if text:
                    return text
        return ""
