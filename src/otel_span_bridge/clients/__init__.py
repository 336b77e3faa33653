# Clients module
from .interfaces import MonitoringClient, NativeSpan, NativeTransaction, Scope
from .in_memory import InMemoryMonitoringClient, InMemoryScope, RecordedSpan, RecordedTransaction

__all__ = [
    "MonitoringClient",
    "NativeSpan",
    "NativeTransaction",
    "Scope",
    "InMemoryMonitoringClient",
    "InMemoryScope",
    "RecordedSpan",
    "RecordedTransaction",
]
