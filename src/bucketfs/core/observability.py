"""Logging and tracing for bucketfs.

Everything diagnostic goes to stderr. ``bucketfs cat`` streams object bytes
to stdout and ``bucketfs ls`` prints one entry per line there, so neither log
records nor exported spans may ever share that stream.

Log records are structlog events with keyword fields (``bucket=``, ``key=``,
``listing=``). They are rendered as JSON by default, or for humans with
``BUCKETFS_LOG_FORMAT=console``. Listing producers log from their own thread;
the logger name tells the listing engine apart from the CLI.

Spans wrap stat, listing producers and object transfers. They are recorded
only with ``BUCKETFS_OTEL_ENABLED=true``; otherwise the global no-op tracer
provider makes them free.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from .config import settings


def setup_tracing() -> None:
    """Install a tracer provider exporting spans to stderr, when enabled."""
    if not settings.otel_enabled:
        return

    resource = Resource.create({"service.name": settings.otel_service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(ConsoleSpanExporter(out=sys.stderr))
    )

    trace.set_tracer_provider(provider)


def _renderer() -> Any:
    if settings.log_format.lower() == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging() -> None:
    """Route structlog through stdlib logging on stderr.

    The level comes from ``BUCKETFS_LOG_LEVEL``.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structlog logger bound to a module name."""
    return structlog.get_logger(name)


def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer; a no-op one unless tracing is enabled."""
    return trace.get_tracer(name)


setup_logging()
setup_tracing()
