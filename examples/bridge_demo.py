"""
Run a few traced operations through the bridge and print the resulting transactions.

Usage:
    python examples/bridge_demo.py [--debug] [--export-console]

Environment (read from .env if present):
    MONITORING_DSN           destination endpoint, defaults to https://demo@ingest.example.com/1.
                             HTTP client spans are dropped when no DSN is set.
    MONITORING_INSTRUMENTER  must be "otel" for the bridge to record anything
"""

import argparse
import json
import logging
import os

from dotenv import load_dotenv

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import SpanKind

from otel_span_bridge import InMemoryMonitoringClient, MonitoringOptions, install_bridge

load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_DSN = "https://demo@ingest.example.com/1"


def transaction_to_dict(transaction):
    """Convert a recorded transaction and its spans to a JSON friendly dict."""
    return {
        "name": transaction.name,
        "op": transaction.op,
        "trace_id": transaction.trace_id,
        "span_id": transaction.span_id,
        "parent_span_id": transaction.parent_span_id,
        "start_timestamp": transaction.start_timestamp,
        "timestamp": transaction.timestamp,
        "spans": [
            {
                "op": span.op,
                "description": span.description,
                "span_id": span.span_id,
                "parent_span_id": span.parent_span_id,
                "http_status": span.http_status,
                "data": span.data,
            }
            for span in transaction.spans
        ],
    }


def simulate_request(tracer):
    with tracer.start_as_current_span("GET /items", kind=SpanKind.SERVER, attributes={"http.method": "GET"}):
        with tracer.start_as_current_span(
            "pg.query",
            kind=SpanKind.CLIENT,
            attributes={"db.system": "postgresql", "db.statement": "SELECT id, name FROM items"},
        ):
            pass
        with tracer.start_as_current_span(
            "HTTP GET",
            kind=SpanKind.CLIENT,
            attributes={
                "http.method": "GET",
                "net.peer.name": "inventory.example.org",
                "http.target": "/stock?ids=1,2,3",
                "http.status_code": 200,
            },
        ):
            pass


def main():
    parser = argparse.ArgumentParser(description="Mirror OpenTelemetry spans into an in-memory monitoring client")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--export-console", action="store_true", help="Also print raw OpenTelemetry spans")
    args = parser.parse_args()

    if args.debug:
        logging.getLogger("otel_span_bridge").setLevel(logging.DEBUG)

    os.environ.setdefault("MONITORING_DSN", DEFAULT_DSN)
    os.environ.setdefault("MONITORING_INSTRUMENTER", "otel")
    options = MonitoringOptions.from_env()
    logger.info(f"Monitoring options: dsn={options.dsn} instrumenter={options.instrumenter.value}")

    provider = TracerProvider(resource=Resource.create({"service.name": "bridge-demo"}))
    if args.export_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(provider)

    client = InMemoryMonitoringClient(options)
    install_bridge(client)

    simulate_request(trace.get_tracer(__name__))
    provider.shutdown()

    print(json.dumps([transaction_to_dict(t) for t in client.finished_transactions], indent=2, default=str))


if __name__ == "__main__":
    main()
