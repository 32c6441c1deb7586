"""Shared FastAPI dependencies: service getters and rate limiting."""
from fastapi import Depends, HTTPException, Request, Response

from voice_mirror.services.rate_limiter import RateLimitConfig, RateLimiter, RateLimitResult
from voice_mirror.services.research_service import ResearchService
from voice_mirror.services.style_transfer_service import StyleTransferService

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please wait before making another request."


def get_research_service() -> ResearchService:
    """Get research service from main app."""
    from voice_mirror.main import research_service
    if research_service is None:
        raise HTTPException(status_code=503, detail="Research service not initialized")
    return research_service


def get_style_transfer_service() -> StyleTransferService:
    """Get style transfer service from main app."""
    from voice_mirror.main import style_transfer_service
    if style_transfer_service is None:
        raise HTTPException(status_code=503, detail="Style transfer service not initialized")
    return style_transfer_service


def get_rate_limiter() -> RateLimiter:
    """Get rate limiter from main app."""
    from voice_mirror.main import rate_limiter
    if rate_limiter is None:
        raise HTTPException(status_code=503, detail="Rate limiter not initialized")
    return rate_limiter


def get_app_settings():
    """Get application settings from main app."""
    from voice_mirror.main import settings
    if settings is None:
        raise HTTPException(status_code=503, detail="Settings not initialized")
    return settings


def get_caller_id(request: Request, app_settings=Depends(get_app_settings)) -> str:
    """
    Identify the caller for rate limiting.

    X-User-Id is client-controlled, so it is only honoured when
    trust_user_id_header is set (a trusted proxy writes it). Otherwise the
    client address is used.
    """
    if app_settings.trust_user_id_header:
        user_id = request.headers.get("X-User-Id", "").strip()
        if user_id:
            return user_id
    return request.client.host if request.client else "anonymous"


def rate_limited(config: RateLimitConfig):
    """
    Build a dependency that enforces a rate limit for one endpoint.

    Allowed requests get the X-RateLimit-* headers on their response;
    rejected ones fail with 429 carrying the same headers.
    """

    async def check_rate_limit(
        response: Response,
        caller_id: str = Depends(get_caller_id),
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> RateLimitResult:
        result = await limiter.check(config, caller_id)
        if not result.allowed:
            raise HTTPException(
                status_code=429,
                detail={"error": RATE_LIMIT_MESSAGE, "reset_time": result.reset_time},
                headers=result.headers(),
            )
        response.headers.update(result.headers())
        return result

    return check_rate_limit
