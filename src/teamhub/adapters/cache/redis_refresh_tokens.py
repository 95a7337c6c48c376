"""Redis implementation of RefreshTokenStorage.

Each user's valid refresh tokens live in one Redis set,
``refresh_tokens:{user_id}``. The set's TTL is pushed forward whenever a
token is stored, so it disappears once the newest token has expired.
"""

import redis.asyncio as redis
import structlog

logger = structlog.get_logger()

KEY_PREFIX = "refresh_tokens"


class RedisRefreshTokenStorage:
    """Refresh token allow-list kept in Redis sets."""

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the storage.

        Args:
            redis_client: Async Redis client.
        """
        self.redis = redis_client

    def _key(self, user_id: str) -> str:
        return f"{KEY_PREFIX}:{user_id}"

    async def store(self, user_id: str, token: str, ttl_seconds: int) -> None:
        key = self._key(user_id)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.sadd(key, token)
            pipe.expire(key, ttl_seconds)
            await pipe.execute()

    async def exists(self, user_id: str, token: str) -> bool:
        return bool(await self.redis.sismember(self._key(user_id), token))

    async def revoke(self, user_id: str, token: str) -> None:
        await self.redis.srem(self._key(user_id), token)

    async def revoke_all(self, user_id: str) -> None:
        await self.redis.delete(self._key(user_id))
        logger.info("refresh_tokens_revoked", user_id=user_id)

    async def get_all(self, user_id: str) -> list[str]:
        members = await self.redis.smembers(self._key(user_id))
        return [m.decode("utf-8") if isinstance(m, bytes) else m for m in members]
