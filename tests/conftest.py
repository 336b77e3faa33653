"""
Shared fixtures for span bridge tests.
"""

import pytest
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.trace import SpanContext, SpanKind

from otel_span_bridge import BridgeSpanProcessor, InMemoryMonitoringClient, MonitoringOptions

TRACE_ID = 0x0AF7651916CD43DD8448EB211C80319C
SPAN_ID_A = 0xAAAAAAAAAAAAAAAA
SPAN_ID_B = 0xBBBBBBBBBBBBBBBB
START_TIME_NS = 1_700_000_000_000_000_000
END_TIME_NS = 1_700_000_002_500_000_000
DSN = "https://abc123@o11.ingest.monitoring.example.com/42"


@pytest.fixture
def make_span():
    """Factory building OpenTelemetry ReadableSpan objects."""

    def _make_span(
        name="span",
        span_id=SPAN_ID_A,
        trace_id=TRACE_ID,
        parent_span_id=None,
        kind=SpanKind.INTERNAL,
        attributes=None,
        resource=None,
        start_time=START_TIME_NS,
        end_time=END_TIME_NS,
    ):
        parent = None
        if parent_span_id is not None:
            parent = SpanContext(trace_id=trace_id, span_id=parent_span_id, is_remote=False)

        return ReadableSpan(
            name=name,
            context=SpanContext(trace_id=trace_id, span_id=span_id, is_remote=False),
            parent=parent,
            resource=resource if resource is not None else Resource.get_empty(),
            attributes=attributes if attributes is not None else {},
            kind=kind,
            start_time=start_time,
            end_time=end_time,
        )

    return _make_span


@pytest.fixture
def options():
    """Options with a DSN and the OpenTelemetry instrumenter."""
    return MonitoringOptions(dsn=DSN, instrumenter="otel")


@pytest.fixture
def client(options):
    """In-memory monitoring client driven by OpenTelemetry."""
    return InMemoryMonitoringClient(options)


@pytest.fixture
def processor(client):
    """Bridge processor reporting to the in-memory client."""
    return BridgeSpanProcessor(client)
