"""Redis-backed sweep lease (SET NX PX with token-checked release)."""
from __future__ import annotations

import logging
import uuid

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)

# Delete the key only if we still own it
_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""


class RedisSweepLease:
    """Implements application.ports.lease.SweepLease."""

    def __init__(self, redis: aioredis.Redis, key: str) -> None:
        self._redis = redis
        self._key = key

    async def acquire(self, ttl_seconds: float) -> str | None:
        token = uuid.uuid4().hex
        acquired = await self._redis.set(
            self._key, token, nx=True, px=max(int(ttl_seconds * 1000), 1),
        )
        return token if acquired else None

    async def release(self, token: str) -> None:
        released = await self._redis.eval(_RELEASE_SCRIPT, 1, self._key, token)
        if not released:
            logger.debug("Sweep lease %s already expired", self._key)
