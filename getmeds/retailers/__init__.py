"""
Retailer adapters.

Modules:
    sopharmacy    - SopharmacyAdapter (html-scrape)
    vmclub        - VMClubAdapter (stateful-session via the relay)
    json_endpoint - JsonEndpointAdapter (json-endpoint)
    parsers       - Markup and JSON parsers used by the adapters
"""

from ..common.errors import ConfigurationError
from ..models import RetailerConfig, SearchStrategy
from ..transport import RelayClient
from .base import AdapterFactory, RetailerAdapter
from .json_endpoint import JsonEndpointAdapter
from .sopharmacy import SopharmacyAdapter
from .vmclub import VMClubAdapter

# Registry of adapters per search strategy
STRATEGY_ADAPTERS = {
    SearchStrategy.HTML_SCRAPE: SopharmacyAdapter,
    SearchStrategy.STATEFUL_SESSION: VMClubAdapter,
    SearchStrategy.JSON_ENDPOINT: JsonEndpointAdapter,
}


def create_adapter(config: RetailerConfig, transport: RelayClient) -> RetailerAdapter:
    """
    Create the adapter for a retailer.

    Args:
        config: Retailer configuration
        transport: Relay client shared by all adapters

    Raises:
        ConfigurationError: If the strategy has no adapter
    """
    adapter_class = STRATEGY_ADAPTERS.get(config.strategy)
    if adapter_class is None:
        supported = ', '.join(s.value for s in STRATEGY_ADAPTERS)
        raise ConfigurationError(
            f"Unsupported strategy for {config.name}: {config.strategy}. Supported: {supported}"
        )
    return adapter_class(config, transport)


__all__ = [
    'AdapterFactory',
    'RetailerAdapter',
    'JsonEndpointAdapter',
    'SopharmacyAdapter',
    'VMClubAdapter',
    'STRATEGY_ADAPTERS',
    'create_adapter',
]
