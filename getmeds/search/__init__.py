"""
Search orchestration.

Modules:
    aggregator - Fan-out over enabled retailers with partial-failure isolation
    session    - Session-scoped result state for filtering and paging
"""

from .aggregator import Aggregator
from .session import SearchSession

__all__ = ['Aggregator', 'SearchSession']
