"""Mutual-exclusion coordination.

Provides build_coordinator() to assemble a coordinator over the configured
lock manager:
- InMemoryLockManager for single-instance deployments and tests
- RedisLockManager for several instances sharing one Redis
"""

from marketplace.config import Settings
from marketplace.locking.coordinator import MutualExclusionCoordinator
from marketplace.locking.memory_adapter import InMemoryLockManager
from marketplace.locking.port import LockHandle, LockManager
from marketplace.locking.redis_adapter import RedisLockManager

__all__ = [
    "InMemoryLockManager",
    "LockHandle",
    "LockManager",
    "MutualExclusionCoordinator",
    "RedisLockManager",
    "build_coordinator",
    "build_lock_manager",
]


def build_lock_manager(settings: Settings) -> LockManager:
    if settings.lock_backend == "redis":
        return RedisLockManager.from_url(settings.redis_url, lease=settings.lock_lease)
    return InMemoryLockManager()


def build_coordinator(settings: Settings) -> MutualExclusionCoordinator:
    return MutualExclusionCoordinator(
        build_lock_manager(settings),
        acquire_timeout=settings.lock_acquire_timeout,
        backoff_base=settings.lock_backoff_base,
        backoff_max=settings.lock_backoff_max,
    )
