"""Redis drivers for kvcache."""

from kvcache_redis.backend import OptimizedRedisCache, RedisCache

__all__ = ["OptimizedRedisCache", "RedisCache"]
