"""Redis-backed key/sorted-set store.

Every reply is normalized to plain Python types here, and every client failure
is re-raised as StoreUnavailable so callers never see redis-specific errors.
"""
import functools
import logging
from typing import List, Optional, Tuple

from redis import Redis
from redis.exceptions import RedisError

from survivors.domain.errors import StoreUnavailable

log = logging.getLogger("survivors.store")

# Store calls must finish quickly or fail outright.
SOCKET_TIMEOUT_SECONDS = 5


def build_redis_client(url: str) -> Redis:
    return Redis.from_url(
        url,
        decode_responses=True,
        socket_timeout=SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=SOCKET_TIMEOUT_SECONDS,
    )


def _guarded(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except RedisError as exc:
            log.error("Redis %s failed: %s: %s", method.__name__, type(exc).__name__, exc)
            raise StoreUnavailable(f"{method.__name__} failed") from exc
    return wrapper


def _as_pairs(reply) -> List[Tuple[str, float]]:
    """Normalize a WITHSCORES reply: list of pairs or flat [m, s, m, s, ...]."""
    if not reply:
        return []
    if isinstance(reply[0], (list, tuple)):
        return [(str(member), float(score)) for member, score in reply]
    return [(str(reply[i]), float(reply[i + 1])) for i in range(0, len(reply) - 1, 2)]


class RedisStore:
    """Thin adapter over a redis-py client."""

    backend = "redis"

    def __init__(self, client: Redis):
        self._redis = client

    @_guarded
    def increment(self, key: str) -> int:
        return int(self._redis.incr(key))

    @_guarded
    def expire(self, key: str, seconds: int) -> bool:
        return bool(self._redis.expire(key, seconds))

    @_guarded
    def hash_set(self, key: str, fields: dict) -> int:
        return int(self._redis.hset(key, mapping=fields))

    @_guarded
    def hash_get_all(self, key: str) -> dict:
        return dict(self._redis.hgetall(key) or {})

    @_guarded
    def sorted_set_insert(self, key: str, score: float, member: str) -> int:
        return int(self._redis.zadd(key, {member: score}))

    @_guarded
    def sorted_set_range_desc_with_scores(
        self, key: str, start: int, stop: int
    ) -> List[Tuple[str, float]]:
        return _as_pairs(self._redis.zrevrange(key, start, stop, withscores=True))

    @_guarded
    def sorted_set_rev_rank(self, key: str, member: str) -> Optional[int]:
        rank = self._redis.zrevrank(key, member)
        return int(rank) if rank is not None else None

    @_guarded
    def sorted_set_cardinality(self, key: str) -> int:
        return int(self._redis.zcard(key))

    @_guarded
    def ping(self) -> bool:
        return bool(self._redis.ping())
