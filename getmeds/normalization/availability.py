"""
Availability classification.

Each retailer reports stock differently: Sopharmacy uses a status
"type" per location, VMClub a numeric status code, the demo data a
quantity. These helpers turn all of them into a consistent Stock.
"""

from typing import Optional

from ..common.constants import AVAILABLE_QUANTITY, LIMITED_QUANTITY
from ..models import AvailabilityClass, Stock

STATUS_TYPE_CLASSES = {
    'success': AvailabilityClass.AVAILABLE,
    'warning': AvailabilityClass.LIMITED,
}

DEFAULT_QUANTITIES = {
    AvailabilityClass.AVAILABLE: AVAILABLE_QUANTITY,
    AvailabilityClass.LIMITED: LIMITED_QUANTITY,
}


def classify_status_type(status_type: Optional[str]) -> AvailabilityClass:
    """
    Classify a location status type.

    Args:
        status_type: Retailer status type ('success', 'warning', ...)

    Returns:
        AVAILABLE for 'success', LIMITED for 'warning', UNAVAILABLE otherwise
    """
    if not status_type:
        return AvailabilityClass.UNAVAILABLE
    return STATUS_TYPE_CLASSES.get(status_type.strip().lower(), AvailabilityClass.UNAVAILABLE)


def classify_quantity(quantity: int) -> AvailabilityClass:
    """Classify a stock count: more than 20 is available, any stock is limited."""
    if quantity > 20:
        return AvailabilityClass.AVAILABLE
    if quantity > 0:
        return AvailabilityClass.LIMITED
    return AvailabilityClass.UNAVAILABLE


def stock_from_class(
    availability: AvailabilityClass,
    status_text: Optional[str] = None,
    quantity: Optional[int] = None,
) -> Stock:
    """
    Build a Stock consistent with its availability class.

    Retailers that expose no counts get a placeholder quantity
    (10 available, 3 limited). Unavailable and unknown stock is always 0.

    Args:
        availability: Normalized availability
        status_text: Retailer status text to carry through
        quantity: Placeholder override for available/limited stock

    Returns:
        Stock instance
    """
    if availability in (AvailabilityClass.AVAILABLE, AvailabilityClass.LIMITED):
        count = quantity if quantity else DEFAULT_QUANTITIES[availability]
        return Stock(in_stock=True, quantity=count, availability=availability, status_text=status_text)

    return Stock(in_stock=False, quantity=0, availability=availability, status_text=status_text)
