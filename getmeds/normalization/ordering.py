"""
Result ordering.

In-stock results always come first. Within the same stock state each
adapter applies its own secondary order: city name for location-based
retailers, price for single-location results.
"""

import unicodedata
from typing import Iterable, List, Optional, Tuple

from ..models import CanonicalResult
from .pricing import price_sort_value


def city_sort_key(city: Optional[str]) -> Tuple[bool, str]:
    """
    Bulgarian-aware sort key for a city name.

    The Cyrillic code point order matches the Bulgarian alphabet
    (the Bulgarian alphabet has no ы or э), so a normalized casefold
    is enough. Missing cities sort last.
    """
    if not city or not city.strip():
        return (True, "")
    normalized = unicodedata.normalize('NFC', ' '.join(city.split()))
    return (False, normalized.casefold())


def sort_by_stock_then_city(results: Iterable[CanonicalResult]) -> List[CanonicalResult]:
    """Sort in-stock first, then by city name."""
    return sorted(
        results,
        key=lambda r: (not r.stock.in_stock, city_sort_key(r.pharmacy.city)),
    )


def sort_by_stock_then_price(results: Iterable[CanonicalResult]) -> List[CanonicalResult]:
    """Sort in-stock first, then by ascending price."""
    return sorted(
        results,
        key=lambda r: (not r.stock.in_stock, price_sort_value(r.price)),
    )
