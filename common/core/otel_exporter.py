from typing import Dict, Optional
import functools
import asyncio
import logging
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from common.core.config import settings

# Configure logging at module level
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,  # This ensures it overrides any existing configuration
)


# Global flag to ensure initialization only happens once
_initialized = False
tracer = None
propagator = None


def _initialize_telemetry():
    """Initialize telemetry once and only once."""
    global _initialized, tracer, propagator

    if _initialized:
        return

    resource = Resource(
        attributes={
            SERVICE_NAME: settings.otel_service_name,
            SERVICE_VERSION: settings.otel_service_version,
        }
    )

    provider = TracerProvider(resource=resource)
    # Spans are only exported when a collector is configured
    if settings.otel_exporter_endpoint:
        otlp_trace_exporter = OTLPSpanExporter(endpoint=settings.otel_exporter_endpoint)
        provider.add_span_processor(BatchSpanProcessor(otlp_trace_exporter))
    trace.set_tracer_provider(provider)
    tracer = trace.get_tracer(settings.otel_service_name)
    propagator = TraceContextTextMapPropagator()

    _initialized = True
    logging.getLogger(__name__).info(
        f"Telemetry initialized (exporter: {settings.otel_exporter_endpoint or 'none'})"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance. Ensures telemetry is initialized.
    Use this instead of logging.getLogger() directly.
    """
    if not _initialized:
        _initialize_telemetry()
    return logging.getLogger(name)


# Custom decorator for automatic span naming
def trace_span(func):
    """Decorator that automatically creates a span with the function name."""

    @functools.wraps(func)
    def sync_wrapper(*args, **kwargs):
        span_name = func.__name__
        if args and hasattr(args[0], "__class__"):
            # If it's a method, include class name
            span_name = f"{args[0].__class__.__name__}.{func.__name__}"

        with _get_tracer().start_as_current_span(span_name):
            return func(*args, **kwargs)

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        span_name = func.__name__
        if args and hasattr(args[0], "__class__"):
            span_name = f"{args[0].__class__.__name__}.{func.__name__}"

        with _get_tracer().start_as_current_span(span_name):
            return await func(*args, **kwargs)

    if asyncio.iscoroutinefunction(func):
        return async_wrapper
    else:
        return sync_wrapper


def _get_tracer():
    if not _initialized:
        _initialize_telemetry()
    return tracer


def create_span_with_context(
    span_name: str, trace_headers: Optional[Dict[str, str]] = None
):
    """
    Create a span with trace context from headers.
    If trace_headers is provided, extract context and create a child span.
    Otherwise, create a span under the current context.
    """
    if trace_headers:
        ctx = propagator.extract(trace_headers)
        return _get_tracer().start_as_current_span(span_name, context=ctx)
    return _get_tracer().start_as_current_span(span_name)
