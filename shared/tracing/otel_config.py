"""Tracing of fractal calculations with OpenTelemetry.

Spans go to an OTLP/HTTP collector once :func:`configure_tracing` has
installed the SDK provider. Until then the API's no-op provider is active
and :func:`trace_function` adds little more than a function call.
"""

import functools
import inspect
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace import Status, StatusCode

F = TypeVar("F", bound=Callable[..., Any])

SERVICE_NAMESPACE = "de.muellerlund"


def configure_tracing(
    service_name: str,
    service_version: str,
    otlp_endpoint: str = "http://otel-collector:4318/v1/traces",
    sampling_rate: float = 0.1,
) -> TracerProvider:
    """Install an SDK tracer provider exporting to ``otlp_endpoint``.

    Root spans are sampled with ``sampling_rate``, child spans follow the
    decision of their parent.

    Args:
        service_name: Reported as ``service.name``
        service_version: Reported as ``service.version``
        otlp_endpoint: Traces URL of the collector
        sampling_rate: Fraction of sampled traces, 0.0 to 1.0

    Returns:
        The installed provider
    """
    resource = Resource.create({
        SERVICE_NAME: service_name,
        SERVICE_VERSION: service_version,
        "service.namespace": SERVICE_NAMESPACE,
    })

    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(root=TraceIdRatioBased(sampling_rate)),
    )
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint)))
    trace.set_tracer_provider(provider)

    return provider


def get_tracer(name: str) -> trace.Tracer:
    return trace.get_tracer(name)


@contextmanager
def _traced(name: str, func: Callable[..., Any]) -> Iterator[trace.Span]:
    tracer = get_tracer(func.__module__)
    with tracer.start_as_current_span(
        name,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        span.set_attribute("code.function", func.__qualname__)
        span.set_attribute("code.namespace", func.__module__)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            raise
        else:
            span.set_status(Status(StatusCode.OK))


def trace_function(span_name: Optional[str] = None) -> Callable[[F], F]:
    """Run every call of the decorated function inside its own span.

    Works for plain and ``async`` functions. Exceptions are recorded on the
    span and re-raised unchanged.

    Args:
        span_name: Span name, defaults to the function name
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__

        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with _traced(name, func):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore

        @functools.wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            with _traced(name, func):
                return func(*args, **kwargs)

        return sync_wrapper  # type: ignore

    return decorator


def shutdown_tracing() -> None:
    """Flush pending spans if the SDK provider is installed."""
    provider = trace.get_tracer_provider()
    if isinstance(provider, TracerProvider):
        provider.shutdown()
