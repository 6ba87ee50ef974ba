"""Redis-backed lock manager for deployments running several instances.

Locks carry a lease: if the holder dies without releasing, Redis expires the
key and the next buyer request can proceed.
"""

import structlog
from redis.asyncio import Redis
from redis.exceptions import LockError

from marketplace.errors import LockContention
from marketplace.locking.port import LockHandle, LockManager

logger = structlog.get_logger(__name__)

KEY_PREFIX = "marketplace:lock:"


class RedisLockManager(LockManager):
    def __init__(self, client: Redis, lease: float = 30.0) -> None:
        self._client = client
        self._lease = lease

    @classmethod
    def from_url(cls, url: str, lease: float = 30.0) -> "RedisLockManager":
        return cls(Redis.from_url(url), lease=lease)

    async def acquire(self, key: str, timeout: float) -> LockHandle:
        lock = self._client.lock(
            KEY_PREFIX + key,
            timeout=self._lease,
            blocking=True,
            blocking_timeout=timeout,
        )
        acquired = await lock.acquire()
        if not acquired:
            raise LockContention(f"Lock {key!r} still held after {timeout}s")

        token = lock.local.token
        if isinstance(token, bytes):
            token = token.decode()
        return LockHandle(key=key, token=str(token), lock=lock)

    async def release(self, handle: LockHandle) -> None:
        try:
            await handle.lock.release()
        except LockError as exc:
            # Lease ran out while the critical section was still running
            logger.warning("Redis lock expired before release", key=handle.key, error=str(exc))
