"""OpenTelemetry instrumentation for Bitkub MCP tools."""

import json
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Optional

import structlog
from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Span, Status, StatusCode

logger = structlog.get_logger()

_REDACTED_KEYS = frozenset({"BITKUB_API_KEY", "BITKUB_SECRET_KEY"})


def _serialize_params(params: Mapping[str, Any]) -> str:
    safe = {
        key: "***" if key in _REDACTED_KEYS else value for key, value in params.items()
    }
    try:
        return json.dumps(safe, default=str)
    except (TypeError, ValueError):
        return str(safe)


@contextmanager
def tool_span(tool_name: str, params: Mapping[str, Any]) -> Iterator[Span]:
    """
    Span around one tool execution.

    Attributes:
    - mcp.tool: Tool name
    - mcp.params: Tool parameters (JSON serialized, credentials redacted)

    Exceptions are recorded on the span and re-raised.
    """
    # Get tracer dynamically to support test fixtures
    tracer = trace.get_tracer(__name__)

    with tracer.start_as_current_span(f"mcp.tool.{tool_name}") as span:
        span.set_attribute("mcp.tool", tool_name)
        span.set_attribute("mcp.params", _serialize_params(params))
        try:
            yield span
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
        span.set_status(Status(StatusCode.OK))


def setup_tracing(
    service_name: str, otlp_endpoint: Optional[str] = None
) -> Optional[TracerProvider]:
    """
    Install an OTLP-exporting tracer provider and instrument httpx.

    Does nothing when no endpoint is configured; spans then go to the
    default no-op provider.
    """
    if not otlp_endpoint:
        return None

    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
        OTLPSpanExporter,
    )
    from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": os.getenv("APP_VERSION", "dev"),
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(provider)

    HTTPXClientInstrumentor().instrument()
    logger.info("OTLP trace export enabled", service=service_name, endpoint=otlp_endpoint)
    return provider
