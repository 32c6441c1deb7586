"""Prometheus metrics shared across routes and services."""
from prometheus_client import Counter, Histogram

REQUESTS_TOTAL = Counter(
    "voice_mirror_requests_total",
    "Requests handled per endpoint and outcome",
    ["endpoint", "outcome"],
)

CHUNKS_SELECTED = Histogram(
    "voice_mirror_chunks_selected",
    "Number of source chunks selected per research question",
    buckets=(0, 1, 2, 3, 5, 10),
)

RATE_LIMIT_REJECTIONS = Counter(
    "voice_mirror_rate_limit_rejections_total",
    "Requests rejected by the rate limiter",
    ["prefix"],
)

LLM_LATENCY_SECONDS = Histogram(
    "voice_mirror_llm_latency_seconds",
    "Latency of text-generation API calls",
)
