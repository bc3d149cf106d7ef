"""OpenTelemetry tracing setup.

Spans come from FastAPI instrumentation; this module only installs the
tracer provider and its exporters.
"""

import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from itemsapi.config.models.observability import TracingConfig


def setup_tracing(
    service_name: str = "itemsapi",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> TracerProvider:
    """Install a global tracer provider.

    Args:
        service_name: Name to identify this service in traces
        otlp_endpoint: OTLP gRPC endpoint (e.g., "localhost:4317").
                       Falls back to OTEL_EXPORTER_OTLP_ENDPOINT env var
        console_export: Also export spans to stdout (for debugging)
    """
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))

    endpoint = otlp_endpoint or os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider


def setup_tracing_from_config(config: TracingConfig) -> TracerProvider:
    return setup_tracing(
        service_name=config.service_name,
        otlp_endpoint=config.otlp_endpoint,
        console_export=config.console_export,
    )
