"""
JSON Endpoint Adapter (json-endpoint strategy)

For retailers exposing a JSON search endpoint. The endpoint is reached
through the relay's generic allow-listed proxy route. Such endpoints
report no per-location stock, so every item is listed at the
retailer's online store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..common.constants import NO_DATA, SESSION_RETAILER_QUANTITY
from ..common.text_utils import absolutize_url, clean_text
from ..models import AvailabilityClass, CanonicalResult, Medicine, PharmacyLocation, RetailerConfig
from ..normalization import format_price, sort_by_stock_then_price, stock_from_class
from ..transport import RelayClient

logger = logging.getLogger(__name__)

ITEM_LIST_KEYS = ('products', 'items', 'results', 'data')
STOCK_KEYS = ('in_stock', 'inStock', 'available', 'availability')


class JsonEndpointAdapter:
    """Maps a generic JSON product search response onto canonical results."""

    def __init__(self, config: RetailerConfig, transport: RelayClient):
        self.config = config
        self.transport = transport
        self.location = PharmacyLocation(
            name=config.name,
            address=f"Онлайн магазин {config.origin}".strip(),
            working_hours=NO_DATA,
        )

    async def search(self, query: str) -> List[CanonicalResult]:
        """
        Search the retailer endpoint.

        Raises:
            UpstreamError: If the endpoint request fails
        """
        url = self.config.search_url.format(query=quote(query, safe=''))
        data = await self.transport.get_proxied_json(url)
        return self.parse_response(data)

    def parse_response(self, data: Any) -> List[CanonicalResult]:
        items = self._item_list(data)
        results = [self.item_result(item) for item in items if isinstance(item, dict)]
        results = [r for r in results if r is not None]
        return sort_by_stock_then_price(results)

    @staticmethod
    def _item_list(data: Any) -> List[Any]:
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            for key in ITEM_LIST_KEYS:
                if isinstance(data.get(key), list):
                    return data[key]
        return []

    def item_result(self, item: Dict[str, Any]) -> Optional[CanonicalResult]:
        name = clean_text(item.get('name') or item.get('title'))
        if not name:
            return None

        medicine = Medicine(
            name=name,
            manufacturer=clean_text(item.get('manufacturer') or item.get('brand')) or self.config.name,
            packaging=clean_text(item.get('packaging')),
            prescription_required=bool(item.get('prescription', False)),
            image_url=absolutize_url(item.get('image') or item.get('imageUrl'), self.config.origin),
            product_link=absolutize_url(item.get('url') or item.get('link'), self.config.origin),
        )

        return CanonicalResult(
            medicine=medicine,
            pharmacy=self.location,
            stock=self._stock(item),
            price=format_price(item.get('price'), item.get('currency')),
            retailer=self.config.name,
        )

    @staticmethod
    def _stock(item: Dict[str, Any]):
        for key in STOCK_KEYS:
            if isinstance(item.get(key), bool):
                if item[key]:
                    return stock_from_class(AvailabilityClass.AVAILABLE, quantity=SESSION_RETAILER_QUANTITY)
                return stock_from_class(AvailabilityClass.UNAVAILABLE)
        return stock_from_class(AvailabilityClass.UNKNOWN)
