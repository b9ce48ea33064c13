"""
Common adapter interface.

Adapters are independent variants sharing one call signature; each
owns its parsing and its degradation policy.
"""

from typing import List, Protocol

from ..models import CanonicalResult, RetailerConfig
from ..transport import RelayClient


class RetailerAdapter(Protocol):
    """Anything with an async search(query) returning canonical results."""

    config: RetailerConfig

    async def search(self, query: str) -> List[CanonicalResult]:
        ...


class AdapterFactory(Protocol):
    def __call__(self, config: RetailerConfig, transport: RelayClient) -> RetailerAdapter:
        ...
