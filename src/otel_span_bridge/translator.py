"""
Translation of OpenTelemetry span attributes into native span fields.
"""

from typing import Any, Dict, Mapping, Optional, Sequence
from dataclasses import dataclass
import logging

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.util.types import AttributeValue

from .clients.interfaces import NativeSpan

logger = logging.getLogger(__name__)

# Legacy semantic convention names come first, stable names are fallbacks
ATTRIBUTE_HTTP_METHOD = ("http.method", "http.request.method")
ATTRIBUTE_HTTP_TARGET = ("http.target", "url.path")
ATTRIBUTE_HTTP_STATUS_CODE = ("http.status_code", "http.response.status_code")
ATTRIBUTE_NET_PEER_NAME = ("net.peer.name", "server.address")
ATTRIBUTE_DB_SYSTEM = ("db.system", "db.system.name")
ATTRIBUTE_DB_STATEMENT = ("db.statement", "db.query.text")

OTEL_CONTEXT_KEY = "otel"


@dataclass(frozen=True)
class Translation:
    """Native fields derived from a finished child span."""
    op: str
    description: str
    http_status: Optional[int] = None


def get_attribute(attributes: Optional[Mapping[str, AttributeValue]], keys: Sequence[str]) -> Optional[AttributeValue]:
    """
    Look up the first present attribute among alternative keys.

    Args:
        attributes: Span attributes, may be None
        keys: Candidate keys in order of preference

    Returns:
        The attribute value, or None if no key is present
    """
    if not attributes:
        return None
    for key in keys:
        value = attributes.get(key)
        if value is not None:
            return value
    return None


def translate(span: ReadableSpan) -> Translation:
    """
    Compute op, description and HTTP status for a child span.

    HTTP attributes win over database attributes when both are present.
    """
    attributes = span.attributes or {}
    op = span.name
    description = span.name
    http_status = None

    http_method = get_attribute(attributes, ATTRIBUTE_HTTP_METHOD)
    if http_method is not None:
        op = f"http.{span.kind.name.lower()}"
        description = str(http_method)

        peer_name = get_attribute(attributes, ATTRIBUTE_NET_PEER_NAME)
        if peer_name is not None:
            description += f" {peer_name}"

        target = get_attribute(attributes, ATTRIBUTE_HTTP_TARGET)
        if target is not None:
            description += str(target)

        status_code = get_attribute(attributes, ATTRIBUTE_HTTP_STATUS_CODE)
        if status_code is not None:
            try:
                http_status = int(status_code)
            except (TypeError, ValueError):
                logger.debug(f"Ignoring non-numeric HTTP status code {status_code!r} on span '{span.name}'")
    elif get_attribute(attributes, ATTRIBUTE_DB_SYSTEM) is not None:
        op = "db"

        statement = get_attribute(attributes, ATTRIBUTE_DB_STATEMENT)
        if statement is not None:
            description = str(statement)

    return Translation(op=op, description=description, http_status=http_status)


def update_span_with_otel_data(native_span: NativeSpan, span: ReadableSpan) -> Translation:
    """
    Copy attributes onto a native child span and set its op and description.

    Args:
        native_span: Native span created for the OpenTelemetry span
        span: The finished OpenTelemetry span

    Returns:
        The translation that was applied
    """
    for key, value in (span.attributes or {}).items():
        native_span.set_data(key, value)

    translation = translate(span)
    if translation.http_status is not None:
        native_span.set_http_status(translation.http_status)

    native_span.set_op(translation.op)
    native_span.set_description(translation.description)
    return translation


def build_otel_context(span: ReadableSpan) -> Dict[str, Any]:
    """
    Build the context block attached to a transaction's scope.

    Args:
        span: The finished root OpenTelemetry span

    Returns:
        Dictionary with ``attributes`` and ``resource`` keys, each omitted if empty
    """
    otel_context: Dict[str, Any] = {}

    attributes = dict(span.attributes or {})
    if attributes:
        otel_context["attributes"] = attributes

    resource = span.resource
    resource_attributes = dict(resource.attributes) if resource is not None else {}
    if resource_attributes:
        otel_context["resource"] = resource_attributes

    return otel_context
