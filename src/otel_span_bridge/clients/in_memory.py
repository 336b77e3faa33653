"""
In-memory monitoring client that records transactions and spans.

Used to run the bridge without a telemetry backend, e.g. in tests or when
inspecting how OpenTelemetry spans map onto native transactions.
"""

from contextvars import ContextVar
from typing import Any, Dict, List, Optional
import logging
import threading
import time

from .interfaces import MonitoringClient, NativeSpan, NativeTransaction, Scope
from ..models import MonitoringOptions
from ..utils import parse_trace_header

logger = logging.getLogger(__name__)


class RecordedSpan(NativeSpan):
    """Native span that keeps every value set on it."""

    def __init__(
        self,
        *,
        span_id: str,
        trace_id: Optional[str],
        parent_span_id: Optional[str] = None,
        description: Optional[str] = None,
        start_timestamp: Optional[float] = None,
        transaction: Optional["RecordedTransaction"] = None,
    ):
        self._span_id = span_id
        self._op: Optional[str] = None
        self.trace_id = trace_id
        self.parent_span_id = parent_span_id
        self.description = description
        self.start_timestamp = start_timestamp if start_timestamp is not None else time.time()
        self.timestamp: Optional[float] = None
        self.http_status: Optional[int] = None
        self.data: Dict[str, Any] = {}
        self.transaction = transaction

    @property
    def span_id(self) -> str:
        return self._span_id

    @property
    def op(self) -> Optional[str]:
        return self._op

    @property
    def finished(self) -> bool:
        return self.timestamp is not None

    def start_child(self, *, span_id: str, description: str, start_timestamp: Optional[float]) -> "RecordedSpan":
        child = RecordedSpan(
            span_id=span_id,
            trace_id=self.trace_id,
            parent_span_id=self.span_id,
            description=description,
            start_timestamp=start_timestamp,
            transaction=self.transaction,
        )
        if self.transaction is not None:
            self.transaction.spans.append(child)
        return child

    def set_op(self, op: str) -> None:
        self._op = op

    def set_description(self, description: str) -> None:
        self.description = description

    def set_http_status(self, status_code: int) -> None:
        self.http_status = int(status_code)

    def set_data(self, key: str, value: Any) -> None:
        self.data[key] = value

    def finish(self, end_timestamp: Optional[float] = None) -> None:
        if self.finished:
            return
        self.timestamp = end_timestamp if end_timestamp is not None else time.time()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} op={self.op!r} description={self.description!r} span_id={self.span_id}>"


class RecordedTransaction(RecordedSpan, NativeTransaction):
    """Root span that records its children and notifies the client on finish."""

    def __init__(
        self,
        client: "InMemoryMonitoringClient",
        *,
        name: str,
        span_id: str,
        trace_id: Optional[str],
        parent_span_id: Optional[str] = None,
        parent_sampled: Optional[bool] = None,
        baggage: Optional[str] = None,
        start_timestamp: Optional[float] = None,
    ):
        super().__init__(
            span_id=span_id,
            trace_id=trace_id,
            parent_span_id=parent_span_id,
            description=name,
            start_timestamp=start_timestamp,
        )
        self.transaction = self
        self._client = client
        self._name = name
        self.parent_sampled = parent_sampled
        self.baggage = baggage
        self.spans: List[RecordedSpan] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def trace_id(self) -> Optional[str]:
        return self._trace_id

    @trace_id.setter
    def trace_id(self, value: Optional[str]) -> None:
        self._trace_id = value

    @property
    def parent_span_id(self) -> Optional[str]:
        return self._parent_span_id

    @parent_span_id.setter
    def parent_span_id(self, value: Optional[str]) -> None:
        self._parent_span_id = value

    def set_name(self, name: str) -> None:
        self._name = name

    def finish(self, end_timestamp: Optional[float] = None) -> None:
        if self.finished:
            return
        super().finish(end_timestamp)
        self._client._record_finished(self)


class InMemoryScope(Scope):
    """
    Scope storing the current span and the data attached to it.

    The current span pointer lives in a context variable, so tasks forked
    from the same scope move their own pointer without affecting siblings.
    """

    def __init__(self, trace_header: Optional[str] = None, baggage: Optional[str] = None):
        self._span_var: ContextVar[Optional[NativeSpan]] = ContextVar(f"monitoring_span_{id(self)}", default=None)
        self.transaction_name: Optional[str] = None
        self.contexts: Dict[str, dict] = {}
        self._trace_header = trace_header
        self._baggage = baggage

    @property
    def span(self) -> Optional[NativeSpan]:
        return self._span_var.get()

    def get_span(self) -> Optional[NativeSpan]:
        return self._span_var.get()

    def set_span(self, span: Optional[NativeSpan]) -> None:
        self._span_var.set(span)

    def set_transaction_name(self, name: str) -> None:
        self.transaction_name = name
        span = self.get_span()
        if isinstance(span, RecordedTransaction):
            span.set_name(name)

    def set_context(self, key: str, value: dict) -> None:
        self.contexts[key] = value

    def continue_from(self, trace_header: Optional[str], baggage: Optional[str] = None) -> None:
        """
        Store upstream continuation data, as an incoming request handler would.

        Args:
            trace_header: Upstream trace header value
            baggage: Upstream baggage value
        """
        self._trace_header = trace_header
        self._baggage = baggage

    @property
    def trace_header(self) -> Optional[str]:
        return self._trace_header

    @property
    def baggage(self) -> Optional[str]:
        return self._baggage


class InMemoryMonitoringClient(MonitoringClient):
    """
    Monitoring client keeping all transactions in memory.

    Each thread gets its own scope through a context variable. Asyncio tasks
    share the scope of the code that created them but keep their own current
    span pointer.
    """

    def __init__(self, options: Optional[MonitoringOptions] = None, logger: Optional[logging.Logger] = None):
        """
        Initialize the in-memory client.

        Args:
            options: Client options, defaults to MonitoringOptions()
            logger: Logger for bridge decision messages
        """
        self._options = options or MonitoringOptions()
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._scope_var: ContextVar[Optional[InMemoryScope]] = ContextVar(f"monitoring_scope_{id(self)}", default=None)
        self._lock = threading.Lock()
        self._initialized = True
        self.transactions: List[RecordedTransaction] = []
        self.finished_transactions: List[RecordedTransaction] = []

    @property
    def options(self) -> MonitoringOptions:
        return self._options

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_initialized(self) -> bool:
        return self._initialized and self._options.enabled

    def get_current_scope(self) -> InMemoryScope:
        scope = self._scope_var.get()
        if scope is None:
            scope = InMemoryScope()
            self._scope_var.set(scope)
        return scope

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
    ) -> RecordedTransaction:
        parent_sampled = None
        header = parse_trace_header(trace_header)
        if header is not None:
            logger.debug(f"Continuing upstream trace {header.trace_id} for transaction '{name}'")
            trace_id = header.trace_id or trace_id
            parent_span_id = header.parent_span_id or parent_span_id
            parent_sampled = header.parent_sampled

        transaction = RecordedTransaction(
            self,
            name=name,
            span_id=span_id,
            trace_id=trace_id,
            parent_span_id=parent_span_id,
            parent_sampled=parent_sampled,
            baggage=baggage if header is not None else None,
            start_timestamp=start_timestamp,
        )
        with self._lock:
            self.transactions.append(transaction)
        return transaction

    def close(self) -> None:
        """Stop accepting spans; the bridge becomes inert."""
        self._initialized = False

    def _record_finished(self, transaction: RecordedTransaction) -> None:
        with self._lock:
            self.finished_transactions.append(transaction)
