"""
OpenTelemetry Span Bridge - Mirrors OpenTelemetry spans into a monitoring client.

This package provides:
- A span processor that turns OpenTelemetry spans into native transactions and child spans
- Translation of HTTP and database span attributes into native op, description and status
- Filtering of spans produced by the monitoring client's own uploads
- A thread-safe registry of in-flight spans
- An in-memory monitoring client for tests and local inspection
"""

__version__ = "0.1.0"

from .models import (
    Dsn,
    HandleKind,
    Instrumenter,
    MonitoringOptions,
    RegistryEntry,
    TraceData,
    TraceHeader,
)
from .span_processor import BridgeSpanProcessor, install_bridge
from .registry import SpanRegistry
from .identity import get_span_id, get_trace_data
from .filters import is_from_monitoring_client
from .translator import Translation, build_otel_context, translate, update_span_with_otel_data
from .clients.interfaces import MonitoringClient, NativeSpan, NativeTransaction, Scope
from .clients.in_memory import InMemoryMonitoringClient

__all__ = [
    "BridgeSpanProcessor",
    "install_bridge",
    "SpanRegistry",
    "get_span_id",
    "get_trace_data",
    "is_from_monitoring_client",
    "Translation",
    "build_otel_context",
    "translate",
    "update_span_with_otel_data",
    # Clients
    "MonitoringClient",
    "NativeSpan",
    "NativeTransaction",
    "Scope",
    "InMemoryMonitoringClient",
    # Models
    "Dsn",
    "HandleKind",
    "Instrumenter",
    "MonitoringOptions",
    "RegistryEntry",
    "TraceData",
    "TraceHeader",
]
