"""
Per-user serialisation of the deactivate-old / insert-new plan transition.

In-process sessions share an asyncio.Lock per user. When several workers
serve the same users, set REDIS_URL and the lock is held in Redis instead.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from redis.asyncio import Redis
from redis.asyncio.lock import Lock
from redis.exceptions import LockError

from mercado.config import settings
from mercado.logging import get_logger

logger = get_logger(__name__)


class PlanCommitLocks:
    """
    In-process locks are created on first use and kept for the life of the
    process, one per user id seen. With REDIS_URL nothing is cached locally.
    """

    def __init__(self, redis_url: Optional[str] = None, timeout_s: Optional[int] = None) -> None:
        self._redis_url = settings.redis_url if redis_url is None else redis_url
        self._timeout_s = timeout_s or settings.plan_lock_timeout_s
        self._local: dict[str, asyncio.Lock] = {}

    @property
    def distributed(self) -> bool:
        return bool(self._redis_url)

    @asynccontextmanager
    async def hold(self, user_id: str) -> AsyncIterator[None]:
        if self.distributed:
            async with self._hold_redis(user_id):
                yield
            return
        lock = self._local.get(user_id)
        if lock is None:
            lock = self._local[user_id] = asyncio.Lock()
        async with lock:
            yield

    @asynccontextmanager
    async def _hold_redis(self, user_id: str) -> AsyncIterator[None]:
        redis_client = Redis.from_url(self._redis_url)
        lock = Lock(redis_client, f"mercado:plan-commit:{user_id}", timeout=self._timeout_s)
        acquired = await lock.acquire(blocking=True, blocking_timeout=self._timeout_s)
        try:
            if not acquired:
                raise RuntimeError(f"Could not acquire plan commit lock for user {user_id}; try again.")
            yield
        finally:
            if acquired:
                try:
                    await lock.release()
                except LockError as e:
                    logger.warning("plan_lock.release_failed user_id=%s error=%s", user_id, e)
            await redis_client.aclose()
