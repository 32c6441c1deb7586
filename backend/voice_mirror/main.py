"""FastAPI application entry point."""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from pydantic_settings import BaseSettings
from starlette.responses import Response

from voice_mirror.api.routes import ask, extract, metrics, style
from voice_mirror.services.llm_service import LLMService
from voice_mirror.services.rate_limiter import RateLimiter
from voice_mirror.services.research_service import ResearchService
from voice_mirror.services.style_transfer_service import StyleTransferService
from voice_mirror.utils.logger import logger
from voice_mirror.utils.tracer import initialize_tracing, shutdown_tracing


class Settings(BaseSettings):
    """Application settings."""

    llm_api_key: str = ""
    llm_api_url: str = "https://api.deepseek.com/v1/chat/completions"
    llm_model: str = "deepseek-chat"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"

    # Source chunking and selection
    chunk_size: int = 500  # Words per source chunk
    max_relevant_chunks: int = 3  # Chunks sent to the model per question

    # Generation limits
    research_max_tokens: int = 4000
    style_transfer_max_tokens: int = 3000
    temperature: float = 0.7

    # Upload limits
    max_file_size_mb: int = 10

    # Rate limiting (shared counters in Redis)
    redis_url: str = "redis://localhost:6379/0"
    enable_rate_limit: bool = True
    trust_user_id_header: bool = False  # Only enable behind a proxy that sets X-User-Id

    # OpenTelemetry tracing configuration
    tracing_enabled: bool = True
    otlp_endpoint: str = ""  # OTLP endpoint URL (empty = use console exporter)

    class Config:
        # Look for .env in both backend/ and the repository root
        env_file = (
            os.path.join(os.path.dirname(__file__), "..", ".env"),
            os.path.join(os.path.dirname(__file__), "..", "..", ".env"),
        )
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global services (initialized in lifespan)
llm_service: LLMService = None
research_service: ResearchService = None
style_transfer_service: StyleTransferService = None
rate_limiter: RateLimiter = None
settings: Settings = None
tracer_provider = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global llm_service, research_service, style_transfer_service, rate_limiter, settings, tracer_provider

    # Startup
    logger.info("Starting Voice Mirror")
    settings = Settings()

    tracer_provider = initialize_tracing(settings)

    llm_service = LLMService(
        api_key=settings.llm_api_key,
        api_url=settings.llm_api_url,
        model=settings.llm_model,
    )
    research_service = ResearchService(
        llm_service=llm_service,
        chunk_size=settings.chunk_size,
        max_relevant_chunks=settings.max_relevant_chunks,
        max_tokens=settings.research_max_tokens,
        temperature=settings.temperature,
    )
    style_transfer_service = StyleTransferService(
        llm_service=llm_service,
        max_tokens=settings.style_transfer_max_tokens,
        temperature=settings.temperature,
    )
    rate_limiter = RateLimiter(
        redis_url=settings.redis_url,
        enabled=settings.enable_rate_limit,
    )

    logger.info(
        f"All services initialized (chunk_size={settings.chunk_size}, "
        f"max_relevant_chunks={settings.max_relevant_chunks}, "
        f"rate_limit={'on' if settings.enable_rate_limit else 'off'})"
    )

    yield

    # Shutdown
    logger.info("Shutting down Voice Mirror")
    if llm_service:
        await llm_service.close()
    if rate_limiter:
        await rate_limiter.close()
    if tracer_provider:
        shutdown_tracing(tracer_provider)


app = FastAPI(
    title="Voice Mirror",
    description="Style transfer and source-grounded answers in the user's own writing voice",
    version="1.0.0",
    lifespan=lifespan,
)


def jsonable_errors(errors):
    """Drop non-serializable validator context (e.g. the raised ValueError)."""
    return [{key: value for key, value in error.items() if key != "ctx"} for error in errors]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle validation errors with better error messages.

    Specifically handles JSON decode errors from invalid control characters.
    """
    errors = exc.errors()

    for error in errors:
        if error.get("type") == "json_invalid":
            ctx = error.get("ctx", {})
            if "Invalid control character" in str(ctx.get("error", "")):
                return JSONResponse(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    content={
                        "detail": "Invalid JSON: Control characters detected in request body. "
                                  "Please ensure your text doesn't contain special control characters.",
                        "error": "json_parse_error",
                        "hint": "Remove any special characters from your text or use proper JSON encoding.",
                    },
                )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(errors)},
    )


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[
        "X-RateLimit-Remaining",
        "X-RateLimit-Remaining-Words",
        "X-RateLimit-Remaining-Files",
        "X-RateLimit-Reset",
    ],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "Voice Mirror"}


@app.get("/metrics")
async def prometheus_metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


app.include_router(ask.router, prefix="/api", tags=["ask"])
app.include_router(style.router, prefix="/api", tags=["style-transfer"])
app.include_router(extract.router, prefix="/api", tags=["extract-text"])
app.include_router(metrics.router, prefix="/api", tags=["metrics"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host if settings else "0.0.0.0", port=settings.api_port if settings else 8000)
