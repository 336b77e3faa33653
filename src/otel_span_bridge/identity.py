"""
Resolution of hex span and trace identifiers from OpenTelemetry spans.
"""

from typing import Optional

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.trace import (
    INVALID_SPAN_ID,
    INVALID_TRACE_ID,
    format_span_id,
    format_trace_id,
)

from .models import TraceData


def hex_span_id(span_id: Optional[int]) -> Optional[str]:
    """Format a 64-bit span id as 16 hex chars; the all-zero id is absent."""
    if span_id is None or span_id == INVALID_SPAN_ID:
        return None
    return format_span_id(span_id)


def hex_trace_id(trace_id: Optional[int]) -> Optional[str]:
    """Format a 128-bit trace id as 32 hex chars; the all-zero id is absent."""
    if trace_id is None or trace_id == INVALID_TRACE_ID:
        return None
    return format_trace_id(trace_id)


def get_span_id(span: ReadableSpan) -> Optional[str]:
    """
    Resolve only the hex span id of a span.

    Args:
        span: The OpenTelemetry span

    Returns:
        Lowercase hex span id, or None if the span has no valid context
    """
    context = span.context
    if context is None:
        return None
    return hex_span_id(context.span_id)


def get_trace_data(span: ReadableSpan) -> TraceData:
    """
    Resolve span id, trace id and parent span id of a span.

    Each identifier is None when the span carries the invalid (all-zero)
    value for it. The parent span id is None for spans started without a
    parent context.

    Args:
        span: The OpenTelemetry span

    Returns:
        TraceData holding the resolved identifiers
    """
    context = span.context
    parent = span.parent

    return TraceData(
        span_id=hex_span_id(context.span_id) if context is not None else None,
        trace_id=hex_trace_id(context.trace_id) if context is not None else None,
        parent_span_id=hex_span_id(parent.span_id) if parent is not None else None,
    )
