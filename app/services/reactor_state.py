"""
Transient per-product memory kept between hook firings.

WordPress announces a product save through several hooks: the type
before the change is only visible in ``pre_post_update``, and
``woocommerce_update_product`` fires twice for one save. Both facts are
remembered here per product ID, for a limited time, so that saves of
different products never see each other's state.
"""
import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from redis import Redis

from app.core.config import settings

logger = logging.getLogger(__name__)

OLD_TYPE = "old_type"
FINGERPRINT = "fingerprint"


class MemoryReactorState:
    """Bounded in-process map with a TTL per entry.

    Hook requests run in the server threadpool, so every access holds
    ``_lock``; ``claim`` reads and writes under one acquisition.
    """

    def __init__(
        self,
        ttl_seconds: int = 300,
        max_entries: int = 10000,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[Tuple[str, int], Tuple[str, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def _get(self, key: Tuple[str, int]) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        return value

    def _set(self, key: Tuple[str, int], value: str) -> None:
        self._entries.pop(key, None)
        self._entries[key] = (value, self._clock() + self.ttl_seconds)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def get_old_type(self, product_id: int) -> Optional[str]:
        with self._lock:
            return self._get((OLD_TYPE, product_id))

    def set_old_type(self, product_id: int, product_type: str) -> None:
        with self._lock:
            self._set((OLD_TYPE, product_id), product_type)

    def claim(self, product_id: int, fingerprint: str) -> bool:
        """
        Record ``fingerprint`` as the last processed state of a product.

        Returns:
            False if the same fingerprint was already recorded (a repeated
            firing for the same save), True otherwise
        """
        key = (FINGERPRINT, product_id)
        with self._lock:
            previous = self._get(key)
            self._set(key, fingerprint)
        return previous != fingerprint

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisReactorState:
    """Redis-backed state, for workers that do not share a process."""

    def __init__(self, redis: Redis, ttl_seconds: int = 300, namespace: str = "catalog_sync"):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.namespace = namespace

    def _key(self, kind: str, product_id: int) -> str:
        return f"{self.namespace}:{kind}:{product_id}"

    @staticmethod
    def _decode(value) -> Optional[str]:
        if value is None:
            return None
        return value.decode("utf-8") if isinstance(value, bytes) else value

    def get_old_type(self, product_id: int) -> Optional[str]:
        return self._decode(self.redis.get(self._key(OLD_TYPE, product_id)))

    def set_old_type(self, product_id: int, product_type: str) -> None:
        self.redis.set(self._key(OLD_TYPE, product_id), product_type, ex=self.ttl_seconds)

    def claim(self, product_id: int, fingerprint: str) -> bool:
        # SET ... GET swaps the value and returns the previous one atomically
        previous = self.redis.set(
            self._key(FINGERPRINT, product_id),
            fingerprint,
            ex=self.ttl_seconds,
            get=True
        )
        return self._decode(previous) != fingerprint


def create_reactor_state():
    """Build the state backend selected by ``settings.reactor_state_backend``."""
    if settings.reactor_state_backend == "redis":
        logger.info(
            f"Using Redis reactor state at {settings.redis_host}:{settings.redis_port}"
        )
        redis = Redis(host=settings.redis_host, port=settings.redis_port, db=settings.redis_db)
        return RedisReactorState(redis, ttl_seconds=settings.reactor_state_ttl_seconds)

    return MemoryReactorState(
        ttl_seconds=settings.reactor_state_ttl_seconds,
        max_entries=settings.reactor_state_max_entries
    )
