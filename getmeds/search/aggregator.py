"""
Search Aggregator

Runs every enabled retailer adapter concurrently and merges the
results. Results are concatenated in configuration order, not in the
order retailers answer, so output is stable when latencies vary.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ..common.errors import SearchFailedError, ValidationError
from ..demo import DemoDataGenerator
from ..models import CanonicalResult, RetailerConfig
from ..retailers import AdapterFactory, create_adapter
from ..transport import RelayClient, settle_all

logger = logging.getLogger(__name__)


class Aggregator:
    """
    Searches all enabled retailers.

    Usage:
        aggregator = Aggregator(load_retailers(), transport)
        results = await aggregator.search("аспирин")
    """

    def __init__(
        self,
        retailers: Iterable[RetailerConfig],
        transport: Optional[RelayClient] = None,
        demo: Optional[DemoDataGenerator] = None,
        min_query_length: int = 2,
        adapter_factory: AdapterFactory = create_adapter,
    ):
        self.retailers = list(retailers)
        self.transport = transport
        self.demo = demo or DemoDataGenerator()
        self.min_query_length = min_query_length
        self.adapter_factory = adapter_factory

    @property
    def enabled_retailers(self) -> List[RetailerConfig]:
        return [r for r in self.retailers if r.enabled]

    def validate_query(self, query: str) -> str:
        """
        Normalize and validate a query.

        Raises:
            ValidationError: If the query is shorter than the minimum length
        """
        query = (query or "").strip()
        if len(query) < self.min_query_length:
            raise ValidationError(
                f"Query must be at least {self.min_query_length} characters, got {len(query)}"
            )
        return query

    async def search(self, query: str) -> List[CanonicalResult]:
        """
        Search every enabled retailer.

        Falls back to demo data when no retailer is enabled. A failing
        retailer only loses its own contribution.

        Raises:
            ValidationError: If the query is too short (no network call is made)
            SearchFailedError: If every enabled retailer failed
        """
        query = self.validate_query(query)

        enabled = self.enabled_retailers
        if not enabled:
            logger.info("No retailers enabled, using demo data for '%s'", query)
            return self.demo.generate(query)

        outcomes = await settle_all(self._search_retailer(config, query) for config in enabled)

        results: List[CanonicalResult] = []
        failures: Dict[str, BaseException] = {}
        for config, outcome in zip(enabled, outcomes):
            if outcome.ok:
                logger.info("%s: %d result(s)", config.name, len(outcome.value))
                results.extend(outcome.value)
            else:
                logger.warning("Error searching %s: %s: %s",
                               config.name, type(outcome.error).__name__, outcome.error)
                failures[config.name] = outcome.error

        if len(failures) == len(enabled):
            raise SearchFailedError(failures)

        return results

    async def _search_retailer(self, config: RetailerConfig, query: str) -> List[CanonicalResult]:
        adapter = self.adapter_factory(config, self.transport)
        return await adapter.search(query)
