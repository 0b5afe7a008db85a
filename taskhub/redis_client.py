import redis
import structlog

from taskhub.config import settings

logger = structlog.get_logger()

# used only by the auth rate limiter; the service runs without it
redis_client = redis.Redis.from_url(
    settings.redis_url,
    decode_responses=True,
    socket_connect_timeout=1,
    socket_timeout=1,
)

def redis_ping() -> bool:
    try:
        return bool(redis_client.ping())
    except redis.RedisError as e:
        logger.warning("redis_unreachable", error=type(e).__name__)
        return False
