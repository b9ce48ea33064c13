"""
Settle-all concurrency.

Every branch is awaited to completion. A failing branch is captured in
its Outcome and never cancels or taints its siblings.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one branch: either a value or the exception it raised."""
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> List[Outcome[T]]:
    """
    Run awaitables concurrently and collect every outcome.

    Args:
        awaitables: Coroutines or futures to run

    Returns:
        One Outcome per awaitable, in input order
    """
    results: List[Any] = await asyncio.gather(*awaitables, return_exceptions=True)

    outcomes: List[Outcome[T]] = []
    for result in results:
        if isinstance(result, Exception):
            outcomes.append(Outcome(error=result))
        elif isinstance(result, BaseException):
            # Cancellation and interpreter exits are not branch failures
            raise result
        else:
            outcomes.append(Outcome(value=result))
    return outcomes
