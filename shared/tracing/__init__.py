"""Distributed tracing module using OpenTelemetry."""

from .otel_config import configure_tracing, get_tracer, shutdown_tracing, trace_function

__all__ = ["configure_tracing", "get_tracer", "shutdown_tracing", "trace_function"]
