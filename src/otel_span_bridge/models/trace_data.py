"""
Models for span identity and the live span registry.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class HandleKind(str, Enum):
    """Kind of native handle created for a foreign span."""
    TRANSACTION = "transaction"
    SPAN = "span"


class TraceData(BaseModel):
    """Hex identifiers resolved from an OpenTelemetry span context."""
    span_id: Optional[str] = Field(None, description="Lowercase hex span id, None if invalid")
    trace_id: Optional[str] = Field(None, description="Lowercase hex trace id, None if invalid")
    parent_span_id: Optional[str] = Field(None, description="Lowercase hex parent span id, None if absent")

    class Config:
        """Pydantic configuration."""
        frozen = True


class RegistryEntry(BaseModel):
    """A native handle tracked while its foreign span is in flight."""
    handle: Any = Field(..., description="Native span or transaction handle")
    parent: Optional[Any] = Field(None, description="Handle that was current when the span started")
    kind: HandleKind = Field(..., description="Whether the handle is a transaction or a child span")

    class Config:
        """Pydantic configuration."""
        frozen = True
        arbitrary_types_allowed = True


class TraceHeader(BaseModel):
    """Upstream trace continuation data carried by a scope."""
    trace_id: Optional[str] = Field(None, description="32 hex character trace id")
    parent_span_id: Optional[str] = Field(None, description="16 hex character span id of the upstream caller")
    parent_sampled: Optional[bool] = Field(None, description="Upstream sampling decision, if sent")

    class Config:
        """Pydantic configuration."""
        frozen = True
