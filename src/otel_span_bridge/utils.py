"""
Utility functions shared by the bridge and the reference client.
"""

import re
from typing import Optional
import logging

from .models import TraceHeader

logger = logging.getLogger(__name__)

TRACE_HEADER_REGEX = re.compile(
    r"^[ \t]*"
    r"([0-9a-f]{32})?"
    r"-?([0-9a-f]{16})?"
    r"-?([01])?"
    r"[ \t]*$"
)


def ns_to_seconds(timestamp_ns: Optional[int]) -> Optional[float]:
    """
    Convert an OpenTelemetry nanosecond timestamp to float seconds.

    Args:
        timestamp_ns: Nanoseconds since the epoch, or None

    Returns:
        Seconds since the epoch, or None when no timestamp was given
    """
    if timestamp_ns is None:
        return None
    return timestamp_ns / 1e9


def parse_trace_header(header: Optional[str]) -> Optional[TraceHeader]:
    """
    Parse an upstream trace header ``<trace_id>-<span_id>[-<sampled>]``.

    Args:
        header: Raw header value

    Returns:
        TraceHeader, or None if the header is empty or malformed
    """
    if not header:
        return None

    match = TRACE_HEADER_REGEX.match(header)
    if not match:
        logger.debug(f"Ignoring malformed trace header '{header}'")
        return None

    trace_id, parent_span_id, sampled_flag = match.groups()
    if not trace_id and not parent_span_id:
        return None

    parent_sampled = None
    if sampled_flag is not None:
        parent_sampled = sampled_flag == "1"

    return TraceHeader(
        trace_id=trace_id,
        parent_span_id=parent_span_id,
        parent_sampled=parent_sampled,
    )
