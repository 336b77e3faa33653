"""
Filter for spans produced by the monitoring client's own HTTP transport.
"""

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.trace import SpanKind

from .models import MonitoringOptions
from .translator import ATTRIBUTE_NET_PEER_NAME, get_attribute

# Connects are sometimes reported as internal spans
CHECKED_KINDS = (SpanKind.CLIENT, SpanKind.INTERNAL)


def is_from_monitoring_client(span: ReadableSpan, options: MonitoringOptions) -> bool:
    """
    Check whether a span was generated by uploads to the monitoring backend.

    Only HTTP client and internal spans are considered. Without a configured
    DSN, or without a peer address on the span, such spans are dropped as
    noise.

    Args:
        span: The OpenTelemetry span being started
        options: Options of the monitoring client

    Returns:
        True if the span should not be bridged, False otherwise
    """
    if not span.name.startswith("HTTP"):
        return False

    if span.kind not in CHECKED_KINDS:
        return False

    if options.dsn is None:
        return True

    address = get_attribute(span.attributes, ATTRIBUTE_NET_PEER_NAME)
    if address is None:
        return True

    return address == options.dsn.host
