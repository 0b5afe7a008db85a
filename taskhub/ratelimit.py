from __future__ import annotations

import hashlib

import redis
import structlog
from fastapi import HTTPException, Request

from taskhub.config import settings
from taskhub.redis_client import redis_client

logger = structlog.get_logger()

def _client_key(name: str, request: Request) -> str:
    ip = (request.client.host if request.client else "unknown").strip()
    digest = hashlib.sha256(ip.encode("utf-8")).hexdigest()[:24]
    return f"rl:{name}:{digest}"

# fixed-window limiter for the unauthenticated auth routes (redis INCR + EXPIRE)
def rate_limit(name: str, limit_per_window: int, window_seconds: int):
    def _dep(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return

        key = _client_key(name, request)
        try:
            pipe = redis_client.pipeline()
            pipe.incr(key)
            pipe.expire(key, window_seconds, nx=True)
            count, _ = pipe.execute()
        except redis.RedisError as e:
            # fail open: login must keep working when redis is down
            logger.warning("rate_limit_unavailable", limiter=name, error=type(e).__name__)
            return

        if int(count) > limit_per_window:
            logger.info("rate_limited", limiter=name, count=int(count))
            raise HTTPException(status_code=429, detail="rate_limited")

    return _dep
