"""Lock manager port (abstract interface).

Defines the named-lock capability the mutual-exclusion coordinator depends
on. This enables swapping between InMemoryLockManager (single instance) and
RedisLockManager (several instances sharing one Redis) without changing any
domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class LockHandle:
    """Proof of ownership returned by a successful acquisition."""

    key: str
    token: str
    lock: Any = field(default=None, repr=False, compare=False)


class LockManager(ABC):
    """Abstract named-lock interface."""

    @abstractmethod
    async def acquire(self, key: str, timeout: float) -> LockHandle:
        """Acquire the lock for ``key``, waiting at most ``timeout`` seconds.

        Raises LockContention when the lock is still held after the timeout.
        """
        ...

    @abstractmethod
    async def release(self, handle: LockHandle) -> None:
        """Release a lock previously returned by acquire()."""
        ...
