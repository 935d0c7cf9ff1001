"""
Redis configuration for the UniStay marketplace.
Provides the shared connection pool backing rate limiting.
"""

from typing import Any, Dict, Optional
import time

from redis import Redis
from redis.connection import ConnectionPool

from unistay.config.settings import settings
import logging

logger = logging.getLogger(__name__)

_redis_pool: Optional[ConnectionPool] = None


def get_redis_pool() -> ConnectionPool:
    """Create the connection pool lazily so imports never touch the network"""
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = ConnectionPool.from_url(
            settings.get_redis_url(),
            max_connections=settings.REDIS_POOL_SIZE,
            decode_responses=True,  # Auto-decode Redis responses to strings
        )
    return _redis_pool


def get_redis_client() -> Redis:
    """Get Redis client bound to the shared pool"""
    return Redis(connection_pool=get_redis_pool())


def check_redis_connection(client: Optional[Redis] = None) -> Dict[str, Any]:
    """Check Redis connection health"""
    client = client or get_redis_client()
    start_time = time.time()

    try:
        is_connected = client.ping() is True
        error_message = None
    except Exception as e:
        logger.error(f"Redis health check failed: {str(e)}")
        is_connected = False
        error_message = str(e)

    return {
        "status": "healthy" if is_connected else "unhealthy",
        "response_time_ms": round((time.time() - start_time) * 1000, 2),
        "error": error_message,
    }
