"""
Data models for span identity, registry entries and client options.
"""

from .trace_data import HandleKind, TraceData, RegistryEntry, TraceHeader
from .options import Dsn, Instrumenter, MonitoringOptions

__all__ = [
    "HandleKind",
    "TraceData",
    "RegistryEntry",
    "TraceHeader",
    # Options
    "Dsn",
    "Instrumenter",
    "MonitoringOptions",
]
