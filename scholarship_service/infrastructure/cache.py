import json
from typing import Any, Optional

import redis
import structlog
from fastapi import Request

from .metrics import cache_hits_total, cache_misses_total

logger = structlog.get_logger(__name__)


class JsonCache:
    """JSON values in Redis. An unreachable Redis behaves like an empty cache."""

    def __init__(self, client: redis.Redis, ttl: int):
        self.client = client
        self.ttl = ttl

    @classmethod
    def from_url(cls, url: str, ttl: int) -> "JsonCache":
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        return cls(client, ttl)

    def get(self, key: str) -> Optional[Any]:
        try:
            value = self.client.get(key)
        except redis.RedisError as e:
            logger.warning("cache_unavailable", op="get", error=str(e))
            return None
        if value is None:
            cache_misses_total.inc()
            return None
        cache_hits_total.inc()
        return json.loads(value)

    def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        try:
            self.client.setex(key, ttl or self.ttl, json.dumps(value, ensure_ascii=False, default=str))
            return True
        except redis.RedisError as e:
            logger.warning("cache_unavailable", op="set", error=str(e))
            return False

    def delete_pattern(self, pattern: str) -> int:
        try:
            keys = list(self.client.scan_iter(match=pattern))
            if keys:
                return self.client.delete(*keys)
            return 0
        except redis.RedisError as e:
            logger.warning("cache_unavailable", op="delete_pattern", error=str(e))
            return 0

    def close(self) -> None:
        self.client.close()


def get_cache(request: Request) -> JsonCache:
    return request.app.state.cache
