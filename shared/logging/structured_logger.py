"""Structured logging for the fractal service.

Entries are rendered by structlog, as one JSON object per line or as
colored console output. Records from the standard library (uvicorn among
them) go through the same processors, so every line has the same shape.
Entries written while handling a request carry its correlation id, entries
written inside a span carry trace and span id.
"""

import logging
import sys
from typing import Any, Dict, List, Optional

import structlog
from opentelemetry import trace
from structlog.types import EventDict, Processor, WrappedLogger

# Fields every entry is tagged with, overridden by configure_logging
SERVICE_FIELDS: Dict[str, str] = {"app": "fractal-music", "environment": "production"}

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def add_app_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag the entry with service name and environment unless it names its own."""
    for key, value in SERVICE_FIELDS.items():
        event_dict.setdefault(key, value)
    return event_dict


def add_trace_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Copy trace and span id of the active span into the entry.

    Outside of a span the entry is left alone.
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = trace.format_trace_id(span_context.trace_id)
        event_dict["span_id"] = trace.format_span_id(span_context.span_id)
    return event_dict


def _renderers(json_logs: bool) -> List[Processor]:
    if json_logs:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service_name: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """Install structlog and a root handler writing to stdout.

    Args:
        log_level: Minimum level of the root logger
        json_logs: JSON lines when true, console output otherwise
        service_name: Value of the "app" field
        environment: Value of the "environment" field
    """
    if service_name:
        SERVICE_FIELDS["app"] = service_name
    if environment:
        SERVICE_FIELDS["environment"] = environment

    pre_chain: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        add_trace_context,
    ]

    structlog.configure(
        processors=pre_chain + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta] + _renderers(json_logs),
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level.upper())

    for name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True


def bind_context(**kwargs: Any) -> None:
    """Add key-value pairs to every entry logged from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
