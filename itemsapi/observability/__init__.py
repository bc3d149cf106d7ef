"""Observability: structured logging, request context, metrics.

structlog for logging, Prometheus for metrics, OpenTelemetry for tracing.
"""
