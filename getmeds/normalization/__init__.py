"""
Normalization of retailer-specific stock and price signals.

Modules:
    availability - Map stock signals onto AvailabilityClass / Stock
    pricing      - Parse scraped prices and format canonical price strings
    ordering     - Sort keys and the per-adapter sort orders
"""

from .availability import (
    classify_quantity,
    classify_status_type,
    stock_from_class,
)
from .ordering import city_sort_key, sort_by_stock_then_city, sort_by_stock_then_price
from .pricing import format_price, parse_price, price_sort_value

__all__ = [
    'classify_quantity',
    'classify_status_type',
    'stock_from_class',
    'city_sort_key',
    'sort_by_stock_then_city',
    'sort_by_stock_then_price',
    'format_price',
    'parse_price',
    'price_sort_value',
]
