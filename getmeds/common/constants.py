"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Currency conversion rates
# EUR to BGN fixed rate (ERM II - legally fixed since 10 July 2020)
EUR_TO_BGN = 1.95583

# Sentinel strings shown instead of empty values
NO_PRICE = "Няма цена"
NO_DATA = "Няма информация"
UNKNOWN_PRODUCT = "Неизвестен продукт"
UNKNOWN_STATUS = "Неизвестен статус"
CHECK_ON_SITE = "Проверете наличността на сайта"

# Placeholder stock counts for retailers that only report a status
AVAILABLE_QUANTITY = 10
LIMITED_QUANTITY = 3
SESSION_RETAILER_QUANTITY = 5

DEFAULT_USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
DEFAULT_ACCEPT_LANGUAGE = "bg-BG,bg;q=0.9,en;q=0.8"
