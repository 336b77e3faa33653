"""
Interfaces of the monitoring client consumed by the span bridge.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from ..models import MonitoringOptions


class NativeSpan(ABC):
    """Abstract native span handle created by the monitoring client."""

    @property
    @abstractmethod
    def span_id(self) -> str:
        """Hex span id of this handle."""
        pass

    @property
    @abstractmethod
    def op(self) -> Optional[str]:
        """Current operation name."""
        pass

    @abstractmethod
    def start_child(self, *, span_id: str, description: str, start_timestamp: Optional[float]) -> "NativeSpan":
        """
        Start a span nested under this one.

        Args:
            span_id: Hex span id to assign to the child
            description: Initial description of the child
            start_timestamp: Start time in seconds since the epoch

        Returns:
            The new child span
        """
        pass

    @abstractmethod
    def set_op(self, op: str) -> None:
        pass

    @abstractmethod
    def set_description(self, description: str) -> None:
        pass

    @abstractmethod
    def set_http_status(self, status_code: int) -> None:
        pass

    @abstractmethod
    def set_data(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def finish(self, end_timestamp: Optional[float] = None) -> None:
        """
        Close the span.

        Args:
            end_timestamp: End time in seconds since the epoch, now if None
        """
        pass


class NativeTransaction(NativeSpan):
    """Abstract root span handle carrying trace level fields."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def trace_id(self) -> Optional[str]:
        pass

    @property
    @abstractmethod
    def parent_span_id(self) -> Optional[str]:
        pass


class Scope(ABC):
    """Per-execution scope holding the current span pointer."""

    @abstractmethod
    def get_span(self) -> Optional[NativeSpan]:
        """
        Get the span new children should attach to.

        Returns:
            Current native span, or None if no span is active
        """
        pass

    @abstractmethod
    def set_span(self, span: Optional[NativeSpan]) -> None:
        pass

    @abstractmethod
    def set_transaction_name(self, name: str) -> None:
        pass

    @abstractmethod
    def set_context(self, key: str, value: dict) -> None:
        """
        Attach a named context block to events of this scope.

        Args:
            key: Context name
            value: Free-form context data
        """
        pass

    @property
    @abstractmethod
    def trace_header(self) -> Optional[str]:
        """Upstream trace header to continue, if any."""
        pass

    @property
    @abstractmethod
    def baggage(self) -> Optional[str]:
        """Upstream baggage to continue, if any."""
        pass


class MonitoringClient(ABC):
    """Abstract interface of the monitoring client the bridge reports to."""

    @property
    @abstractmethod
    def options(self) -> "MonitoringOptions":
        pass

    @property
    @abstractmethod
    def logger(self) -> logging.Logger:
        """Logger used for informational messages about bridge decisions."""
        pass

    @abstractmethod
    def is_initialized(self) -> bool:
        """
        Check whether the client is set up and accepting spans.

        Returns:
            True if initialized, False otherwise
        """
        pass

    @abstractmethod
    def get_current_scope(self) -> Scope:
        """
        Get the scope of the current execution (thread or task).

        Returns:
            The active Scope
        """
        pass

    @abstractmethod
    def start_transaction(
        self,
        *,
        trace_id: Optional[str],
        parent_span_id: Optional[str],
        name: str,
        span_id: str,
        start_timestamp: Optional[float],
        trace_header: Optional[str] = None,
        baggage: Optional[str] = None,
    ) -> NativeTransaction:
        """
        Start a root transaction.

        When ``trace_header`` is given the transaction continues the upstream
        trace it describes instead of starting from ``trace_id``.

        Args:
            trace_id: Hex trace id of the foreign span
            parent_span_id: Hex id of a remote parent span, if any
            name: Transaction name
            span_id: Hex span id to assign to the transaction
            start_timestamp: Start time in seconds since the epoch
            trace_header: Upstream trace header from the scope
            baggage: Upstream baggage from the scope

        Returns:
            The new transaction
        """
        pass
