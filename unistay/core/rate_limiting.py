"""
Rate Limiting

Fixed-window request counting backed by Redis. The limiter is an explicit
service object handed to request handlers through dependency injection;
all counter state lives in Redis so limits hold across worker processes.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, Mapping, Optional

from fastapi import Depends, Request, Response
from redis import Redis
from redis.exceptions import RedisError

from unistay.config.logging import get_logger
from unistay.core.exceptions import RateLimitExceeded

logger = get_logger(__name__)

DEFAULT_CATEGORY = "default"


@dataclass(frozen=True)
class RateLimitRule:
    """Rate limit configuration for one category"""
    requests: int
    window_seconds: int


@dataclass
class RateLimitResult:
    """Rate limit check result"""
    allowed: bool
    limit: int
    remaining: int
    reset_at: int  # unix seconds
    retry_after: int
    key: str

    def headers(self) -> Dict[str, str]:
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(self.reset_at),
        }


class RateLimiter:
    """
    Fixed-window limiter.

    Each (category, client, window) triple gets one Redis counter that is
    incremented and given a TTL inside a single MULTI/EXEC pipeline, so
    concurrent requests from many processes are counted exactly once.
    """

    def __init__(
        self,
        redis_client: Redis,
        rules: Mapping[str, Mapping[str, int]],
        clock: Callable[[], float] = time.time,
        fail_open: bool = True,
    ):
        self.redis = redis_client
        self.rules: Dict[str, RateLimitRule] = {
            name: RateLimitRule(requests=int(rule["requests"]), window_seconds=int(rule["window_seconds"]))
            for name, rule in rules.items()
        }
        if DEFAULT_CATEGORY not in self.rules:
            raise ValueError("Rate limit rules must define a 'default' category")
        self._clock = clock
        self.fail_open = fail_open

    def rule_for(self, category: str) -> RateLimitRule:
        return self.rules.get(category, self.rules[DEFAULT_CATEGORY])

    def hit(self, category: str, identifier: str) -> RateLimitResult:
        """Count one request for ``identifier`` and report whether it is allowed."""
        rule = self.rule_for(category)
        now = self._clock()
        window = int(now // rule.window_seconds)
        reset_at = (window + 1) * rule.window_seconds
        key = f"rate_limit:{category}:{identifier}:{window}"

        try:
            pipe = self.redis.pipeline()
            pipe.incr(key)
            pipe.expire(key, rule.window_seconds)
            count, _ = pipe.execute()
        except RedisError as e:
            logger.error(
                f"Rate limit check failed for {key}: {str(e)}",
                extra={"rate_limit_key": key, "fail_open": self.fail_open},
            )
            if not self.fail_open:
                raise
            return RateLimitResult(
                allowed=True,
                limit=rule.requests,
                remaining=rule.requests,
                reset_at=reset_at,
                retry_after=0,
                key=key,
            )

        count = int(count)
        allowed = count <= rule.requests
        return RateLimitResult(
            allowed=allowed,
            limit=rule.requests,
            remaining=max(0, rule.requests - count),
            reset_at=reset_at,
            retry_after=0 if allowed else max(1, int(reset_at - now)),
            key=key,
        )


def get_client_ip(request: Request) -> str:
    """Resolve the client address, honouring proxy headers"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


def rate_limit(category: str = DEFAULT_CATEGORY, limiter_dependency: Optional[Callable] = None):
    """
    Build a FastAPI dependency enforcing ``category`` limits.

    Example:
        router = APIRouter(dependencies=[Depends(rate_limit("default"))])
    """
    if limiter_dependency is None:
        from unistay.api.deps import get_rate_limiter
        limiter_dependency = get_rate_limiter

    def dependency(
        request: Request,
        response: Response,
        limiter: Optional[RateLimiter] = Depends(limiter_dependency),
    ) -> None:
        if limiter is None:
            return
        result = limiter.hit(category, get_client_ip(request))
        if not result.allowed:
            logger.warning(
                f"Rate limit exceeded for {result.key}",
                extra={"rate_limit_key": result.key, "limit": result.limit},
            )
            raise RateLimitExceeded(
                retry_after=result.retry_after,
                limit=result.limit,
                reset_at=result.reset_at,
                message=f"Too many requests; limit resets at {format_reset(result.reset_at)}",
            )
        for header, value in result.headers().items():
            response.headers[header] = value

    return dependency


def format_reset(reset_at: int) -> str:
    """Human readable reset time for error messages"""
    return datetime.fromtimestamp(reset_at, tz=timezone.utc).isoformat()
