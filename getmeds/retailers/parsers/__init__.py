"""
Parsers for retailer responses.

Each parser handles one response shape:
- SearchPageParser: Product cards on an HTML search page
- ProductImageParser: Primary image of a product detail page
- AvailabilityFeedParser: Per-product location availability JSON
- ListingMarkupParser: Generic product items in raw markup fragments
"""

from .availability_feed import AvailabilityFeedParser, LocationAvailability
from .listing_markup import ListingItem, ListingMarkupParser
from .product_page import ProductImageParser
from .search_page import SearchPageParser

__all__ = [
    'AvailabilityFeedParser',
    'LocationAvailability',
    'ListingItem',
    'ListingMarkupParser',
    'ProductImageParser',
    'SearchPageParser',
]
