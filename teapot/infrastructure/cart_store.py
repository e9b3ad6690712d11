import json
import logging
from typing import Dict, List, Optional

import redis
from redis.exceptions import RedisError

from teapot.core.config import settings
from teapot.interfaces.ICartStore import ICartStore

logger = logging.getLogger(__name__)

CART_KEY = "orderItems"

class CartStore(ICartStore):
    """
    Durable home of every open cart.
    Redis when it answers, RAM otherwise. Last write wins, no locking.
    While Redis is up it is the only source read from, so carts cleared by
    another worker or expired by the TTL stay gone.
    """

    def __init__(self, redis_url: Optional[str] = None, ttl: int = 3600, client=None):
        self.redis = client
        self.redis_available = False
        self.ttl = ttl

        # 1. Primary Memory (Redis)
        try:
            if self.redis is None and redis_url:
                self.redis = redis.from_url(
                    redis_url,
                    decode_responses=True,
                    socket_connect_timeout=1  # Fail fast if Redis is down
                )
            if self.redis is not None:
                self.redis.ping()
                self.redis_available = True
                print("✅ CartStore: Connected to Redis.")
            else:
                print("⚠️ CartStore: No REDIS_URL configured. Carts live in RAM.")
        except (RedisError, ValueError) as e:
            print(f"⚠️ CartStore: Redis unreachable ({e}). Using RAM fallback.")

        # 2. Fallback Memory (RAM), written on every save so a Redis outage loses nothing
        self._memory_store: Dict[str, str] = {}

    def load(self, cart_id: str) -> List[Dict]:
        key = self._key(cart_id)

        if self.redis_available:
            try:
                data = self.redis.get(key)
            except RedisError as e:
                self._handle_redis_error(e)
            else:
                return self._decode(cart_id, data)

        return self._decode(cart_id, self._memory_store.get(key))

    def _decode(self, cart_id: str, data: Optional[str]) -> List[Dict]:
        if not data:
            return []
        try:
            lines = json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable cart {cart_id}: {e}")
            return []
        return lines if isinstance(lines, list) else []

    def save(self, cart_id: str, lines: List[Dict]):
        key = self._key(cart_id)
        json_data = json.dumps(lines)

        if self.redis_available:
            try:
                self.redis.setex(key, self.ttl, json_data)
            except RedisError as e:
                self._handle_redis_error(e)

        self._memory_store[key] = json_data

    def clear(self, cart_id: str):
        key = self._key(cart_id)

        if self.redis_available:
            try:
                self.redis.delete(key)
            except RedisError as e:
                self._handle_redis_error(e)

        self._memory_store.pop(key, None)

    def _key(self, cart_id: str) -> str:
        return f"cart:{cart_id}:{CART_KEY}"

    def _handle_redis_error(self, e):
        """Log error and switch flag to False to stop trying Redis for a while."""
        logger.error(f"❌ Redis Error: {e}. Switching to RAM mode.")
        self.redis_available = False


def build_cart_store() -> CartStore:
    return CartStore(redis_url=settings.REDIS_URL, ttl=settings.CART_TTL_SECONDS)
