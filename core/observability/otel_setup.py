"""
OpenTelemetry setup

- Traces for letter generation (one span per request)
- OTLP export when an endpoint is configured, otherwise spans stay in-process
"""
from __future__ import annotations

from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

TRACER_NAME = "noreply"


def setup_otel(
    service_name: str = "noreply",
    endpoint: Optional[str] = None,
) -> trace.Tracer:
    """Initialize OpenTelemetry, with an OTLP exporter when ``endpoint`` is set."""
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if endpoint:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        exporter = OTLPSpanExporter(endpoint=endpoint)
        provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    return trace.get_tracer(service_name)


def get_tracer() -> trace.Tracer:
    """Tracer from the global provider; a no-op tracer until ``setup_otel`` runs."""
    return trace.get_tracer(TRACER_NAME)


def create_letter_span(tracer: trace.Tracer, letter_type: str):
    """Span for one letter generation."""
    return tracer.start_as_current_span(
        "letter.generate",
        attributes={"letter.type": letter_type},
    )
