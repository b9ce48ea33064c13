"""
Price parsing and formatting.
"""

import re
from typing import Optional, Union

from ..common.constants import EUR_TO_BGN, NO_PRICE

PRICE_PATTERN = re.compile(r'\d+(?:[.,]\d+)?')

# Space, NBSP or narrow NBSP between a digit and a group of three digits
GROUP_SEPARATOR_PATTERN = re.compile(r'(?<=\d)[ \u00a0\u202f](?=\d{3}(?!\d))')

EUR_CURRENCIES = {'eur', '€', 'euro'}


def parse_price(text: Optional[Union[str, int, float]]) -> Optional[float]:
    """
    Parse a scraped price.

    Digit group separators are dropped first, then the first numeric run
    is taken so trailing currency text such as "лв." does not leak its
    dot into the number.

    Examples:
        "12,50 лв." -> 12.5
        "Цена: 7.71" -> 7.71
        "1 234,50 лв." -> 1234.5
        "" -> None
    """
    if text is None or isinstance(text, bool):
        return None
    if isinstance(text, (int, float)):
        return float(text)

    match = PRICE_PATTERN.search(GROUP_SEPARATOR_PATTERN.sub('', text))
    if not match:
        return None
    return float(match.group(0).replace(',', '.'))


def format_price(value: Optional[Union[str, int, float]], currency: Optional[str] = None) -> str:
    """
    Format a price as a canonical BGN string.

    Args:
        value: Numeric price or scraped price text
        currency: Source currency; EUR amounts are converted to BGN

    Returns:
        Price with 2 decimals (e.g., "12.50") or the "no price" sentinel
    """
    amount = parse_price(value)
    if amount is None or amount <= 0:
        return NO_PRICE

    if currency and currency.strip().lower() in EUR_CURRENCIES:
        amount = amount * EUR_TO_BGN

    return f"{amount:.2f}"


def price_sort_value(price: str) -> float:
    """Numeric value of a canonical price string; missing prices sort last."""
    amount = parse_price(price)
    return amount if amount is not None else float('inf')
