"""Base service class for domain services."""

import asyncio
from typing import Awaitable, TypeVar

import logfire

from passage.domain.error import TransientError

T = TypeVar("T")


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


async def bounded(awaitable: Awaitable[T], seconds: float, operation: str) -> T:
    """Await a call to an external collaborator with an upper time bound.

    Args:
        awaitable: The pending call
        seconds: Time budget
        operation: Name used in logs and the error message

    Returns:
        The call's result

    Raises:
        TransientError: If the budget is exceeded
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        logfire.warn("Operation timed out", operation=operation, timeout=seconds)
        raise TransientError(f"{operation} timed out") from e
