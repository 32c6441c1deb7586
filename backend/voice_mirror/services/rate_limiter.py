"""Fixed-window rate limiting backed by a shared Redis counter."""
import time
from dataclasses import dataclass
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from voice_mirror.utils.logger import logger
from voice_mirror.utils.metrics import RATE_LIMIT_REJECTIONS


@dataclass(frozen=True)
class RateLimitConfig:
    """Window length, cap on counted units (requests or words) and key namespace."""

    window_ms: int
    limit: int
    key_prefix: str


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate limit check; reset_time is epoch milliseconds."""

    allowed: bool
    remaining: int
    reset_time: int

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_time),
        }


RAG_QA = RateLimitConfig(window_ms=60 * 1000, limit=10, key_prefix="rag_qa")
STYLE_TRANSFER = RateLimitConfig(window_ms=60 * 1000, limit=15, key_prefix="style_transfer")
EXTRACT_TEXT = RateLimitConfig(window_ms=60 * 1000, limit=20, key_prefix="extract_text")
EXTRACT_TEXT_WORDS = RateLimitConfig(window_ms=60 * 1000, limit=5000, key_prefix="extract_text_words")


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """
    Per-user counters shared by every server instance.

    Each (endpoint, user) pair owns a Redis key that is incremented by the
    amount consumed and expires when its window ends. Rejected amounts are
    taken back off the counter, so only accepted work uses up the budget.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        enabled: bool = True,
        redis_client: Optional[redis.Redis] = None,
    ):
        """
        Initialize rate limiter.

        Args:
            redis_url: Redis connection URL
            enabled: Enable/disable rate limiting
            redis_client: Pre-built client (used instead of redis_url when given)
        """
        self.enabled = enabled
        self.redis_client = redis_client
        if enabled and redis_client is None:
            self.redis_client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2,
            )
            logger.info(f"Rate limiter using Redis at {redis_url}")

    async def check(self, config: RateLimitConfig, user_id: str) -> RateLimitResult:
        """Count one request against the limit."""
        return await self.consume(config, user_id, 1)

    async def consume(self, config: RateLimitConfig, user_id: str, amount: int) -> RateLimitResult:
        """
        Add amount to the caller's counter and report whether it fits the limit.

        The first amount in a window is always accepted, even when it alone
        exceeds the limit. Redis errors allow the request through.

        Args:
            config: Endpoint limits
            user_id: Caller identity
            amount: Units to consume (1 per request, or a word count)

        Returns:
            RateLimitResult for this amount
        """
        now = _now_ms()
        if not self.enabled or self.redis_client is None:
            return RateLimitResult(allowed=True, remaining=config.limit, reset_time=now + config.window_ms)

        key = f"{config.key_prefix}:{user_id}"
        try:
            count = await self.redis_client.incrby(key, amount)
            if count == amount:
                await self.redis_client.pexpire(key, config.window_ms)
                ttl_ms = config.window_ms
            else:
                ttl_ms = await self.redis_client.pttl(key)
                if ttl_ms < 0:
                    # Key lost its expiry; restart the window
                    await self.redis_client.pexpire(key, config.window_ms)
                    ttl_ms = config.window_ms

            rejected = count > config.limit and count != amount
            if rejected:
                await self.redis_client.decrby(key, amount)
        except RedisError as e:
            logger.warning(
                f"Rate limit check failed, allowing request: {str(e)}",
                extra={"rate_limit_key": key},
            )
            return RateLimitResult(allowed=True, remaining=config.limit, reset_time=now + config.window_ms)

        reset_time = now + ttl_ms
        if rejected:
            RATE_LIMIT_REJECTIONS.labels(prefix=config.key_prefix).inc()
            logger.info("Rate limit exceeded", extra={"rate_limit_key": key})
            return RateLimitResult(allowed=False, remaining=0, reset_time=reset_time)

        return RateLimitResult(allowed=True, remaining=max(config.limit - count, 0), reset_time=reset_time)

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
                logger.info("Rate limiter Redis connection closed")
            except Exception as e:
                logger.warning(f"Error closing Redis connection: {str(e)}")
