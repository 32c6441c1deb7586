"""Services for source chunk selection, style transfer and research answers."""
from voice_mirror.services.chunker import chunk_text
from voice_mirror.services.relevance_selector import (
    extract_query_terms,
    rank_chunks,
    score_chunk,
    score_chunks,
    select_relevant,
)
from voice_mirror.services.llm_service import LLMService
from voice_mirror.services.rate_limiter import RateLimiter, RateLimitConfig, RateLimitResult
from voice_mirror.services.research_service import ResearchService
from voice_mirror.services.style_transfer_service import StyleTransferService

__all__ = [
    "chunk_text",
    "extract_query_terms",
    "rank_chunks",
    "score_chunk",
    "score_chunks",
    "select_relevant",
    "LLMService",
    "RateLimiter",
    "RateLimitConfig",
    "RateLimitResult",
    "ResearchService",
    "StyleTransferService",
]
