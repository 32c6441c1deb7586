"""OpenTelemetry tracing for source selection and text-generation calls."""
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.openai import OpenAIInstrumentor

from voice_mirror.models.document import ScoredChunk
from voice_mirror.utils.logger import logger

SERVICE_NAME = "voice-mirror"
SERVICE_VERSION = "1.0.0"
TRACER_NAME = "voice_mirror"
SELECTION_SPAN = "voice_mirror.select_source_chunks"


def _build_exporter(otlp_endpoint: str) -> SpanExporter:
    if otlp_endpoint:
        logger.info(f"Tracing initialized with OTLP exporter: {otlp_endpoint}")
        return OTLPSpanExporter(endpoint=otlp_endpoint)
    logger.info("Tracing initialized with console exporter")
    return ConsoleSpanExporter()


def initialize_tracing(settings) -> Optional[TracerProvider]:
    """
    Set up the global tracer provider from application settings.

    Reads `tracing_enabled` and `otlp_endpoint`; an empty endpoint sends
    spans to the console. The OpenAI SDK used by LLMService is instrumented
    so each completion call gets its own span.

    Returns:
        TracerProvider if tracing is enabled and set up, None otherwise
    """
    if not settings.tracing_enabled:
        logger.info("Tracing is disabled")
        return None

    try:
        resource = Resource.create({"service.name": SERVICE_NAME, "service.version": SERVICE_VERSION})
        tracer_provider = TracerProvider(resource=resource)
        tracer_provider.add_span_processor(BatchSpanProcessor(_build_exporter(settings.otlp_endpoint)))
        trace.set_tracer_provider(tracer_provider)
        OpenAIInstrumentor().instrument()
        return tracer_provider
    except Exception as e:
        logger.error(f"Failed to initialize tracing: {str(e)}", exc_info=True)
        return None


@contextmanager
def selection_span(chunk_size: int, max_chunks: int) -> Iterator[trace.Span]:
    """Span around chunking and ranking one source document."""
    tracer = trace.get_tracer(TRACER_NAME)
    with tracer.start_as_current_span(SELECTION_SPAN) as span:
        span.set_attribute("voice_mirror.chunk_size", chunk_size)
        span.set_attribute("voice_mirror.max_chunks", max_chunks)
        yield span


def record_selection(span: trace.Span, chunk_count: int, selected: Sequence[ScoredChunk]) -> None:
    """Attach the outcome of a chunk selection to its span."""
    span.set_attribute("voice_mirror.chunk_count", chunk_count)
    span.set_attribute("voice_mirror.chunks_used", len(selected))
    span.set_attribute("voice_mirror.chunk_scores", [item.score for item in selected])


def shutdown_tracing(tracer_provider: Optional[TracerProvider]) -> None:
    """Flush pending spans and shut the provider down."""
    if tracer_provider:
        try:
            tracer_provider.shutdown()
            logger.info("Tracing shutdown completed")
        except Exception as e:
            logger.warning(f"Error during tracing shutdown: {str(e)}")
