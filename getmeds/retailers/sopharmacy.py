"""
Sopharmacy Adapter (html-scrape strategy)

Search sequence:
1. Fetch the search page and extract a bounded list of product cards
2. Enrich missing thumbnails from the first few product pages
3. Fetch each product's availability feed and emit one result per location

Only the search page fetch can fail the adapter. Image enrichment and
availability feeds degrade to "no data" for the affected product.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional
from urllib.parse import quote

from ..common.constants import NO_DATA, UNKNOWN_STATUS
from ..models import CanonicalResult, Medicine, PharmacyLocation, RetailerConfig, ScrapedProductRef
from ..normalization import classify_status_type, format_price, sort_by_stock_then_city, stock_from_class
from ..transport import RelayClient, settle_all
from .parsers import AvailabilityFeedParser, LocationAvailability, ProductImageParser, SearchPageParser

logger = logging.getLogger(__name__)


class SopharmacyAdapter:
    """Scrapes Sopharmacy search pages and per-product availability feeds."""

    MANUFACTURER = "SOpharmacy"

    def __init__(self, config: RetailerConfig, transport: RelayClient):
        self.config = config
        self.transport = transport
        self.search_parser = SearchPageParser(config.origin)
        self.image_parser = ProductImageParser(config.origin)
        self.feed_parser = AvailabilityFeedParser()

    async def search(self, query: str) -> List[CanonicalResult]:
        """
        Search the retailer.

        Raises:
            UpstreamError: If the search page cannot be fetched
        """
        search_url = self.config.search_url.format(query=quote(query, safe=''))
        html = await self.transport.get_retailer_text(self.config.relay_name, search_url)

        refs = self.search_parser.parse(html, limit=self.config.product_limit)
        logger.debug("%s: %d product(s) for '%s'", self.config.name, len(refs), query)
        if not refs:
            return []

        refs = await self.enrich_images(refs)

        outcomes = await settle_all(self.fetch_product_results(ref) for ref in refs)
        results: List[CanonicalResult] = []
        for ref, outcome in zip(refs, outcomes):
            if outcome.ok:
                results.extend(outcome.value)
            else:
                logger.warning("%s: availability for product %s unavailable: %s",
                               self.config.name, ref.external_id, outcome.error)

        return sort_by_stock_then_city(results)

    async def enrich_images(self, refs: List[ScrapedProductRef]) -> List[ScrapedProductRef]:
        """Fill missing images from product pages for the first few references."""
        limit = self.config.image_enrichment_limit
        targets = [i for i, ref in enumerate(refs[:limit]) if not ref.image_url]
        if not targets:
            return refs

        outcomes = await settle_all(self.fetch_product_image(refs[i]) for i in targets)

        enriched = list(refs)
        for index, outcome in zip(targets, outcomes):
            if not outcome.ok:
                logger.debug("%s: image enrichment failed for %s: %s",
                             self.config.name, refs[index].external_id, outcome.error)
            elif outcome.value:
                enriched[index] = dataclasses.replace(refs[index], image_url=outcome.value)
        return enriched

    async def fetch_product_image(self, ref: ScrapedProductRef) -> Optional[str]:
        product_url = ref.detail_link
        if self.config.product_url:
            product_url = self.config.product_url.format(product_id=ref.external_id)
        html = await self.transport.get_retailer_text(self.config.relay_name, product_url)
        return self.image_parser.parse(html)

    async def fetch_product_results(self, ref: ScrapedProductRef) -> List[CanonicalResult]:
        """Fetch the availability feed of one product; no locations means no results."""
        feed_url = self.config.availability_url.format(product_id=ref.external_id)
        data = await self.transport.get_retailer_json(self.config.relay_name, feed_url)

        locations = self.feed_parser.parse(data)
        if not locations:
            logger.debug("%s: no locations for product %s", self.config.name, ref.external_id)
            return []

        medicine = Medicine(
            name=ref.name,
            manufacturer=self.MANUFACTURER,
            image_url=ref.image_url,
            product_link=ref.detail_link,
        )
        price = format_price(ref.price)
        return [self.to_result(medicine, location, price) for location in locations]

    def to_result(self, medicine: Medicine, location: LocationAvailability, price: str) -> CanonicalResult:
        availability = classify_status_type(location.status_type)

        address = ', '.join(part for part in (location.address, location.city) if part)

        pharmacy = PharmacyLocation(
            name=location.name or self.config.name,
            address=address or NO_DATA,
            working_hours=location.working_hours or NO_DATA,
            city=location.city or None,
            phone=location.phone or NO_DATA,
            coordinates=location.coordinates,
        )

        return CanonicalResult(
            medicine=medicine,
            pharmacy=pharmacy,
            stock=stock_from_class(availability, location.status_text or UNKNOWN_STATUS),
            price=price,
            retailer=self.config.name,
        )
