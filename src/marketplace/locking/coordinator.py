"""Mutual-exclusion coordinator: named critical sections with bounded retry."""

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from marketplace.errors import LockContention
from marketplace.locking.port import LockManager

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class MutualExclusionCoordinator:
    """Runs actions so that at most one per key is in flight.

    Each attempt waits up to ``acquire_timeout`` for the lock; between
    attempts it backs off exponentially with full jitter, capped at
    ``backoff_max``. The lock is released however the action ends, and a
    failed release never replaces the action's result or error.
    """

    def __init__(
        self,
        manager: LockManager,
        acquire_timeout: float = 2.0,
        backoff_base: float = 0.05,
        backoff_max: float = 1.0,
    ) -> None:
        self.manager = manager
        self.acquire_timeout = acquire_timeout
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max

    def backoff_delay(self, attempt: int) -> float:
        ceiling = min(self.backoff_max, self.backoff_base * (2 ** (attempt - 1)))
        return random.uniform(0, ceiling)

    async def run_exclusive(self, key: str, max_attempts: int, action: Callable[[], Awaitable[T]]) -> T:
        handle = None
        for attempt in range(1, max_attempts + 1):
            try:
                handle = await self.manager.acquire(key, timeout=self.acquire_timeout)
                break
            except LockContention:
                logger.debug("Lock contended", key=key, attempt=attempt, max_attempts=max_attempts)
                if attempt < max_attempts:
                    await asyncio.sleep(self.backoff_delay(attempt))

        if handle is None:
            logger.warning("Lock acquisition exhausted", key=key, max_attempts=max_attempts)
            raise LockContention(f"Could not acquire {key!r} after {max_attempts} attempts")

        try:
            return await action()
        finally:
            try:
                await self.manager.release(handle)
            except Exception as exc:
                # The action already ran; a stale lock is left to expire
                logger.warning("Lock release failed", key=key, error=repr(exc))
