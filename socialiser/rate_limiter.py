"""
Redis fixed-window rate limiting for the model-backed endpoints.

Gemini quota is shared by every user, so each user gets a small per-minute
allowance. When Redis is not configured or unreachable the limiter fails
open: the assistant is best-effort and should not go down with the cache.
"""

import logging
import time
from typing import Optional

import redis
from fastapi import HTTPException, Request

from .config import REDIS_URL

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None


def get_redis_client() -> Optional[redis.Redis]:
    """Get or create the Redis client, or None when REDIS_URL is unset"""
    global redis_client

    if redis_client is None and REDIS_URL:
        logger.info("🔄 Initializing Redis connection for rate limiting...")
        redis_client = redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
            health_check_interval=30,
        )
    return redis_client


def check_rate_limit(
    client: redis.Redis, key: str, limit: int, window_seconds: int
) -> tuple[bool, int, int]:
    """
    Count this request in the current window.

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    window_key = f"{key}:{int(time.time()) // window_seconds}"
    pipe = client.pipeline()
    pipe.incr(window_key)
    pipe.expire(window_key, window_seconds)
    count, _ = pipe.execute()
    ttl = window_seconds - int(time.time()) % window_seconds
    return int(count) <= limit, int(count), ttl


def _request_identity(request: Request) -> str:
    user_id = getattr(request.state, "user_id", None)
    if user_id is not None:
        return f"user:{user_id}"
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return f"ip:{forwarded.split(',')[0].strip()}"
    return f"ip:{request.client.host if request.client else 'unknown'}"


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        rate_limit_chat = create_rate_limiter(limit=20, window_seconds=60, key_prefix="ai_chat")

        @router.post("/ai-chat")
        async def chat(data: ChatRequest, _: None = Depends(rate_limit_chat)):
            ...
    """

    async def rate_limiter(request: Request):
        try:
            client = get_redis_client()
            if client is None:
                return
            key = f"{key_prefix}:{_request_identity(request)}"
            is_allowed, current_count, ttl = check_rate_limit(client, key, limit, window_seconds)
        except redis.RedisError as e:
            logger.warning(f"⚠️ Rate limiter unavailable, allowing request (fail-open): {e}")
            return

        if not is_allowed:
            logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
            raise HTTPException(
                status_code=429,
                detail={
                    "message": f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
                    "retry_after": ttl,
                },
                headers={"Retry-After": str(ttl)},
            )

    return rate_limiter
