# backend/barbershop/redis_client.py

from typing import Optional

from redis import Redis

from .config import settings


def _build_client() -> Optional[Redis]:
    if not settings.redis_url:
        return None
    return Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_timeout=2.0,
    )


# None when REDIS_URL is not configured: the schedule is then read from the database every time
redis_client: Optional[Redis] = _build_client()


def get_redis() -> Optional[Redis]:
    """FastAPI dependency for the (optional) shared Redis client."""
    return redis_client
