"""
CACHE SERVICE - Redis-based caching for deep analysis replies

Deep analysis calls are slow and billed to the caller's API key, so identical
requests (same provider, model, system prompt and prompt text) reuse the raw
reply for a while. Caching is best-effort: without Redis it is simply off.
"""

import json
import hashlib
from typing import Optional, Any
import redis
from prompt_strength.config import REDIS_URL
from prompt_strength.utils import get_logger, Constants

logger = get_logger(__name__)

class CacheService:
    """Service class for caching operations."""

    def __init__(self, url: str = REDIS_URL):
        self.url = url
        self.redis_client = None
        self._connect()

    def _connect(self):
        """Connect to Redis (graceful fallback if not available)."""
        try:
            self.redis_client = redis.Redis.from_url(
                self.url,
                decode_responses=True,
                socket_connect_timeout=1,
            )
            self.redis_client.ping()
            logger.info("Redis cache connected successfully")
        except Exception as e:
            logger.warning(f"Redis not available, caching disabled: {e}")
            self.redis_client = None

    def is_available(self) -> bool:
        """Check if Redis cache is available."""
        return self.redis_client is not None

    def make_key(self, prefix: str, *args) -> str:
        """Generate a cache key from prefix and arguments."""
        # JSON keeps argument boundaries, so ("a:b", "c") and ("a", "b:c") differ
        key_data = json.dumps([prefix, *[str(arg) for arg in args]])
        return f"{prefix}:{hashlib.sha256(key_data.encode()).hexdigest()}"

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache."""
        if not self.is_available():
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                return json.loads(value)
        except Exception as e:
            logger.error(f"Cache get error: {e}")

        return None

    def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Set value in cache with TTL."""
        if not self.is_available():
            return False

        try:
            return bool(self.redis_client.setex(key, ttl, json.dumps(value)))
        except Exception as e:
            logger.error(f"Cache set error: {e}")
            return False

    def cache_analysis(self, key_parts: tuple, raw_text: str) -> bool:
        """Cache a raw deep analysis reply."""
        return self.set(self.make_key("analysis", *key_parts), raw_text, ttl=Constants.ANALYSIS_CACHE_TTL)

    def get_cached_analysis(self, key_parts: tuple) -> Optional[str]:
        """Get a cached raw deep analysis reply."""
        return self.get(self.make_key("analysis", *key_parts))

# Global cache instance
cache_service = CacheService()
