"""
Redis storage adapter.
Works with Upstash managed Redis (REDIS_URL) or a self-hosted instance.
"""

import json
import logging
from typing import Any, Optional

import redis

from .. import config
from ..shared.exceptions import StorageError
from .base import JSONStore

logger = logging.getLogger(__name__)


def get_redis_client() -> redis.Redis:
    """
    Create a Redis client from configuration
    Supports both standard Redis and Upstash managed Redis
    """
    redis_url = config.REDIS_URL

    if redis_url:
        # Mask password in URL for logging
        if "@" in redis_url:
            url_parts = redis_url.split("@")
            protocol = url_parts[0].split(":")[0]
            masked_url = f"{protocol}:****@{url_parts[1]}"
        else:
            masked_url = "****"
        logger.info(f"📡 Using Redis URL connection: {masked_url}")

        return redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=15,
            socket_timeout=30,
            retry_on_timeout=True,
            health_check_interval=30,
            max_connections=20,
        )

    logger.info(
        f"📡 Using Redis at {config.REDIS_HOST}:{config.REDIS_PORT} "
        f"(db={config.REDIS_DB}, ssl={'on' if config.REDIS_SSL else 'off'})"
    )
    return redis.Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        password=config.REDIS_PASSWORD,
        db=config.REDIS_DB,
        ssl=config.REDIS_SSL,
        decode_responses=True,
        socket_connect_timeout=15,
        socket_timeout=30,
        retry_on_timeout=True,
        health_check_interval=30,
        max_connections=20,
    )


class RedisStore(JSONStore):
    """Stores each key as a single JSON string value"""

    name = "redis"

    def __init__(self, client: Optional[redis.Redis] = None, key_prefix: str = ""):
        self._client = client
        self.key_prefix = key_prefix

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis_client()
        return self._client

    def _redis_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _get(self, key: str) -> Optional[Any]:
        redis_key = self._redis_key(key)
        try:
            raw = self.client.get(redis_key)
        except redis.RedisError as e:
            logger.error(f"❌ Redis read failed for {redis_key}: {e}")
            raise StorageError(f"Redis read failed for {redis_key}") from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Malformed JSON stored under {redis_key}: {e}")
            raise StorageError(f"Malformed JSON stored under {redis_key}") from e

    def _put(self, key: str, value: Any, description: str) -> None:
        redis_key = self._redis_key(key)
        try:
            self.client.set(redis_key, json.dumps(value))
        except redis.RedisError as e:
            logger.error(f"❌ Redis write failed for {redis_key}: {e}")
            raise StorageError(f"Redis write failed for {redis_key}") from e
        logger.info(f"✅ Successfully wrote to Redis: {redis_key}")
