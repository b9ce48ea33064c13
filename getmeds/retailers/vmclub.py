"""
VMClub Adapter (stateful-session strategy)

The retailer's search endpoint needs session cookies and an anti-forgery
token, so the relay runs the whole exchange and returns the retailer's
JSON. Two response shapes are handled:

- Structured: {"products": [...]} (or a bare product list), each product
  optionally carrying per-location availability
- Markup: {"html": "..."} with product items in a markup fragment

The session is bootstrapped anew on every search; there is no retry.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..common.constants import CHECK_ON_SITE, NO_DATA, SESSION_RETAILER_QUANTITY
from ..common.text_utils import absolutize_url, clean_text
from ..models import (
    AvailabilityClass,
    CanonicalResult,
    Coordinates,
    Medicine,
    PharmacyLocation,
    RetailerConfig,
)
from ..normalization import format_price, sort_by_stock_then_city, stock_from_class
from ..transport import RelayClient
from .parsers import ListingItem, ListingMarkupParser

logger = logging.getLogger(__name__)

AVAILABLE_TEXT = "Наличен"
UNAVAILABLE_TEXT = "Няма наличност"
MARKUP_STATUS_TEXT = "Наличен в София"

DEFAULT_LOCATION = PharmacyLocation(
    name="VMClub София",
    address="Различни локации в София",
    working_hours="Виж сайта за работно време",
    city="София",
    phone="0700 20 888",
)


class VMClubAdapter:
    """Parses relay-mediated VMClub search responses."""

    def __init__(self, config: RetailerConfig, transport: RelayClient):
        self.config = config
        self.transport = transport
        self.markup_parser = ListingMarkupParser(config.origin)

    async def search(self, query: str) -> List[CanonicalResult]:
        """
        Search the retailer through the relay session exchange.

        Raises:
            ConfigurationError: If the relay is disabled
            UpstreamError: If the session bootstrap or search call fails
        """
        data = await self.transport.session_search(self.config.relay_name, query)
        results = self.parse_response(data)
        logger.debug("%s: %d result(s) for '%s'", self.config.name, len(results), query)
        return results

    def parse_response(self, data: Any) -> List[CanonicalResult]:
        """Convert a relay response into canonical results; unknown shapes yield []."""
        products = None
        html = None
        if isinstance(data, list):
            products = data
        elif isinstance(data, dict):
            products = data.get('products')
            html = data.get('html')

        if isinstance(products, list):
            results = []
            for product in products:
                if isinstance(product, dict):
                    results.extend(self.product_results(product))
            return sort_by_stock_then_city(results)

        if isinstance(html, str) and html.strip():
            items = self.markup_parser.parse(html)
            return [self.markup_result(item) for item in items]

        logger.debug("%s: response has neither products nor markup", self.config.name)
        return []

    def product_results(self, product: Dict[str, Any]) -> List[CanonicalResult]:
        """
        One result per location; a product without locations gets one
        placeholder with unknown availability.
        """
        medicine = self.product_medicine(product)
        price = format_price(product.get('price'), product.get('priceCurrency') or product.get('currency'))

        locations = product.get('locations')
        if not isinstance(locations, list) or not locations:
            return [CanonicalResult(
                medicine=medicine,
                pharmacy=DEFAULT_LOCATION,
                stock=stock_from_class(AvailabilityClass.UNKNOWN, CHECK_ON_SITE),
                price=price,
                retailer=self.config.name,
            )]

        return [
            self.location_result(medicine, location, price)
            for location in locations
            if isinstance(location, dict)
        ]

    def product_medicine(self, product: Dict[str, Any]) -> Medicine:
        name = clean_text(product.get('name') or product.get('title')) or clean_text(product.get('sku'))
        return Medicine(
            name=name,
            manufacturer=clean_text(product.get('brand')) or self.config.name,
            packaging=clean_text(product.get('packaging') or product.get('description')),
            prescription_required=bool(product.get('prescription', False)),
            image_url=absolutize_url(product.get('image') or product.get('image_url'), self.config.origin),
            product_link=absolutize_url(
                product.get('productUrl') or product.get('url') or product.get('link'), self.config.origin
            ),
        )

    def location_result(self, medicine: Medicine, location: Dict[str, Any], price: str) -> CanonicalResult:
        if self._status_code(location.get('status')) == 0:
            stock = stock_from_class(
                AvailabilityClass.AVAILABLE,
                clean_text(location.get('statusText')) or AVAILABLE_TEXT,
                quantity=SESSION_RETAILER_QUANTITY,
            )
        else:
            stock = stock_from_class(
                AvailabilityClass.UNAVAILABLE,
                clean_text(location.get('statusText')) or UNAVAILABLE_TEXT,
            )

        city = clean_text(location.get('city')) or None
        address = clean_text(location.get('address'))
        hours = location.get('workingHours') or location.get('working_hours') or location.get('worktime')
        if isinstance(hours, list):
            hours = ', '.join(str(part) for part in hours if part)

        pharmacy = PharmacyLocation(
            name=clean_text(location.get('name')) or DEFAULT_LOCATION.name,
            address=address or NO_DATA,
            working_hours=clean_text(hours) or NO_DATA,
            city=city,
            phone=clean_text(location.get('phone')) or NO_DATA,
            coordinates=self._coordinates(location),
        )

        return CanonicalResult(
            medicine=medicine,
            pharmacy=pharmacy,
            stock=stock,
            price=price,
            retailer=self.config.name,
        )

    def markup_result(self, item: ListingItem) -> CanonicalResult:
        medicine = Medicine(
            name=item.name,
            manufacturer=self.config.name,
            image_url=item.image_url,
            product_link=item.link,
        )
        return CanonicalResult(
            medicine=medicine,
            pharmacy=DEFAULT_LOCATION,
            stock=stock_from_class(
                AvailabilityClass.AVAILABLE, MARKUP_STATUS_TEXT, quantity=SESSION_RETAILER_QUANTITY
            ),
            price=format_price(item.price),
            retailer=self.config.name,
        )

    @staticmethod
    def _status_code(status: Any) -> Optional[int]:
        """Binary status code: 0 means available, anything else does not."""
        try:
            return int(status)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _coordinates(location: Dict[str, Any]) -> Optional[Coordinates]:
        lat = _first_present(location, ('lat', 'latitude'))
        lng = _first_present(location, ('lon', 'lng', 'longitude'))
        if lat is None or lng is None:
            return None
        try:
            return Coordinates(lat=float(lat), lng=float(lng))
        except (TypeError, ValueError):
            return None


def _first_present(data: Dict[str, Any], keys) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None
