"""In-process lock manager for single-instance deployments and tests."""

import asyncio
from uuid import uuid4

from marketplace.errors import LockContention
from marketplace.locking.port import LockHandle, LockManager


class InMemoryLockManager(LockManager):
    """One asyncio.Lock per key, created on first use.

    A key's entry is dropped once its lock is released with nobody waiting,
    so the map only holds keys that are in use.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiting: dict[str, int] = {}

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    def is_locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def tracked_keys(self) -> set[str]:
        return set(self._locks)

    async def acquire(self, key: str, timeout: float) -> LockHandle:
        lock = self._lock_for(key)
        self._waiting[key] = self._waiting.get(key, 0) + 1
        try:
            await asyncio.wait_for(lock.acquire(), timeout=timeout)
        except TimeoutError:
            raise LockContention(f"Lock {key!r} still held after {timeout}s") from None
        finally:
            self._waiting[key] -= 1
            if not self._waiting[key]:
                del self._waiting[key]
        return LockHandle(key=key, token=uuid4().hex, lock=lock)

    async def release(self, handle: LockHandle) -> None:
        if handle.lock.locked():
            handle.lock.release()

        # A woken waiter still counts as waiting until it holds the lock
        if (
            not handle.lock.locked()
            and handle.key not in self._waiting
            and self._locks.get(handle.key) is handle.lock
        ):
            del self._locks[handle.key]
