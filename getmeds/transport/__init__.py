"""
Network transport for the search pipeline.

Modules:
    relay_client - Async HTTP access to retailers through the relay
    settle       - Settle-all fan-out returning one Outcome per branch
"""

from .relay_client import RelayClient, create_http_client
from .settle import Outcome, settle_all

__all__ = [
    'RelayClient',
    'create_http_client',
    'Outcome',
    'settle_all',
]
