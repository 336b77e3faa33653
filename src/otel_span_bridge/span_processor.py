"""
OpenTelemetry span processor feeding spans into a monitoring client.
"""

from typing import Optional
import logging

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.sdk.trace import ReadableSpan, Span, SpanProcessor, TracerProvider

from .clients.interfaces import MonitoringClient, Scope
from .filters import is_from_monitoring_client
from .identity import get_span_id, get_trace_data
from .models import HandleKind, Instrumenter, RegistryEntry, TraceData
from .registry import SpanRegistry
from .translator import OTEL_CONTEXT_KEY, build_otel_context, update_span_with_otel_data
from .utils import ns_to_seconds

logger = logging.getLogger(__name__)


class BridgeSpanProcessor(SpanProcessor):
    """
    Mirrors OpenTelemetry spans as native transactions and spans.

    A span started while the scope has no current span becomes a transaction,
    any other span becomes a child of the current span. The current span
    pointer is moved to the new handle on start and back to the previous one
    on finish, so native nesting follows OpenTelemetry nesting.
    """

    def __init__(self, client: MonitoringClient, registry: Optional[SpanRegistry] = None):
        """
        Initialize the BridgeSpanProcessor.

        Args:
            client: Monitoring client implementing MonitoringClient interface
            registry: Registry of in-flight spans, a new one if None
        """
        self.client = client
        self.registry = registry if registry is not None else SpanRegistry()
        self.logger = logging.getLogger(self.__class__.__name__)

    def is_active(self) -> bool:
        """True when the client is initialized and driven by OpenTelemetry."""
        return self.client.is_initialized() and self.client.options.instrumenter == Instrumenter.OTEL

    def on_start(self, span: Span, parent_context: Optional[Context] = None) -> None:
        if not self.is_active():
            return

        try:
            self._start(span)
        except Exception as e:
            self.logger.error(f"Failed to bridge start of span '{span.name}': {e}")

    def on_end(self, span: ReadableSpan) -> None:
        self.on_finish(span)

    def on_finish(self, span: ReadableSpan) -> None:
        if not self.is_active():
            return

        try:
            self._finish(span)
        except Exception as e:
            self.logger.error(f"Failed to bridge finish of span '{span.name}': {e}")

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        # The monitoring client flushes on its own close.
        return True

    def shutdown(self) -> None:
        # The monitoring client is closed for the same reason as the tracer.
        pass

    def _start(self, span: Span) -> None:
        if is_from_monitoring_client(span, self.client.options):
            logger.debug(f"Skipping span '{span.name}' sent by the monitoring client")
            return

        trace_data = get_trace_data(span)
        if not trace_data.span_id:
            return

        scope = self.client.get_current_scope()
        parent = scope.get_span()

        if parent is not None:
            self.client.logger.info(f"Continuing otel span {span.name} on parent {parent.op}")
            handle = parent.start_child(
                span_id=trace_data.span_id,
                description=span.name,
                start_timestamp=ns_to_seconds(span.start_time),
            )
            kind = HandleKind.SPAN
        else:
            self.client.logger.info(f"Starting otel transaction {span.name}")
            handle = self._start_transaction(span, trace_data, scope)
            kind = HandleKind.TRANSACTION

        scope.set_span(handle)
        self.registry.insert(trace_data.span_id, RegistryEntry(handle=handle, parent=parent, kind=kind))

    def _start_transaction(self, span: Span, trace_data: TraceData, scope: Scope):
        return self.client.start_transaction(
            trace_id=trace_data.trace_id,
            parent_span_id=trace_data.parent_span_id,
            name=span.name,
            span_id=trace_data.span_id,
            start_timestamp=ns_to_seconds(span.start_time),
            trace_header=scope.trace_header,
            baggage=scope.baggage,
        )

    def _finish(self, span: ReadableSpan) -> None:
        span_id = get_span_id(span)
        if not span_id:
            return

        entry = self.registry.pop(span_id)
        if entry is None:
            return

        scope = self.client.get_current_scope()
        handle = entry.handle
        handle.set_op(span.name)

        if entry.kind == HandleKind.TRANSACTION:
            scope.set_transaction_name(span.name)
            scope.set_context(OTEL_CONTEXT_KEY, build_otel_context(span))
        else:
            update_span_with_otel_data(handle, span)

        self.client.logger.info(f"Finishing native span {handle.op}")
        handle.finish(end_timestamp=ns_to_seconds(span.end_time))

        if entry.parent is not None:
            scope.set_span(entry.parent)
        elif scope.get_span() is handle:
            scope.set_span(None)


def install_bridge(client: MonitoringClient, tracer_provider: Optional[TracerProvider] = None) -> BridgeSpanProcessor:
    """
    Create a BridgeSpanProcessor and register it with a tracer provider.

    Args:
        client: Monitoring client to report to
        tracer_provider: SDK tracer provider, the global provider if None

    Returns:
        The registered processor

    Raises:
        TypeError: If no SDK tracer provider is available
    """
    provider = tracer_provider if tracer_provider is not None else trace.get_tracer_provider()
    if not isinstance(provider, TracerProvider):
        raise TypeError(
            f"Expected an opentelemetry.sdk.trace.TracerProvider, got {type(provider).__name__}. "
            "Set one with opentelemetry.trace.set_tracer_provider() first."
        )

    processor = BridgeSpanProcessor(client)
    provider.add_span_processor(processor)
    logger.debug(f"Installed {processor.__class__.__name__} on {provider.__class__.__name__}")
    return processor
