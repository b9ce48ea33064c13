"""
Search Session

Holds the results of the latest search so they can be filtered and
paged without searching again. The result buffer is replaced wholesale
on every search and cleared by reset().
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ..models import CanonicalResult
from ..normalization import city_sort_key
from .aggregator import Aggregator

logger = logging.getLogger(__name__)


class SearchSession:
    """
    Session-scoped search state.

    Usage:
        session = SearchSession(aggregator)
        await session.search("ибупрофен")
        in_sofia = session.filter(available_only=True, city="София")
    """

    def __init__(self, aggregator: Aggregator):
        self.aggregator = aggregator
        self.query: str = ""
        self.results: Tuple[CanonicalResult, ...] = ()

    async def search(self, query: str) -> List[CanonicalResult]:
        """Run a search and replace the session results with its output."""
        results = await self.aggregator.search(query)
        self.query = query.strip()
        self.results = tuple(results)
        logger.debug("Session holds %d result(s) for '%s'", len(self.results), self.query)
        return list(self.results)

    def reset(self) -> None:
        self.query = ""
        self.results = ()

    def filter(
        self,
        available_only: bool = False,
        city: Optional[str] = None,
        text: Optional[str] = None,
        retailer: Optional[str] = None,
    ) -> List[CanonicalResult]:
        """
        Filter the session results, preserving their order.

        Args:
            available_only: Keep only in-stock results
            city: Keep results in this city (case-insensitive)
            text: Keep results whose medicine or pharmacy name contains the text
            retailer: Keep results from this retailer (case-insensitive)
        """
        city_key = city_sort_key(city) if city else None
        needle = text.strip().casefold() if text else ""
        retailer_key = retailer.strip().casefold() if retailer else ""

        filtered = []
        for result in self.results:
            if available_only and not result.stock.in_stock:
                continue
            if city_key is not None and city_sort_key(result.pharmacy.city) != city_key:
                continue
            if retailer_key and result.retailer.casefold() != retailer_key:
                continue
            if needle and needle not in result.medicine.name.casefold() \
                    and needle not in result.pharmacy.name.casefold():
                continue
            filtered.append(result)
        return filtered

    def page(self, offset: int = 0, limit: Optional[int] = None,
             results: Optional[List[CanonicalResult]] = None) -> List[CanonicalResult]:
        """Slice results (the session results by default)."""
        source = list(self.results) if results is None else results
        offset = max(0, offset)
        if limit is None:
            return source[offset:]
        return source[offset:offset + max(0, limit)]

    def cities(self) -> List[str]:
        """Distinct cities in the session results, alphabetically."""
        cities = {r.pharmacy.city for r in self.results if r.pharmacy.city}
        return sorted(cities, key=city_sort_key)
