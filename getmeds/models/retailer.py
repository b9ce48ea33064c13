"""
Retailer configuration and adapter-internal models.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SearchStrategy(str, Enum):
    """How a retailer is searched."""
    HTML_SCRAPE = "html-scrape"
    JSON_ENDPOINT = "json-endpoint"
    STATEFUL_SESSION = "stateful-session"


@dataclass(frozen=True)
class RetailerConfig:
    """
    Read-only retailer definition loaded at process start.

    URL templates use ``{query}`` and ``{product_id}`` placeholders.
    ``relay_name`` is the value passed as ``pharmacy=`` to the relay.
    """
    name: str
    enabled: bool
    strategy: SearchStrategy
    origin: str = ""
    search_url: str = ""
    availability_url: str = ""
    product_url: str = ""
    relay_name: str = ""
    product_limit: int = 5
    image_enrichment_limit: int = 3


@dataclass(frozen=True)
class ScrapedProductRef:
    """Product reference scraped from a search page (never leaves an adapter)."""
    external_id: str
    name: str
    detail_link: str
    image_url: Optional[str] = None
    price: Optional[float] = None
