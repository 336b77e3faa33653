"""
Thread-safe registry of native handles for in-flight OpenTelemetry spans.
"""

import threading
from typing import Dict, Optional

from .models import RegistryEntry


class SpanRegistry:
    """
    Maps hex span ids to the native handle created for them.

    An entry exists from the accepted start of a span until its finish.
    Spans may start and finish on different threads, so every access goes
    through a single lock.
    """

    def __init__(self):
        self._entries: Dict[str, RegistryEntry] = {}
        self._lock = threading.Lock()

    def insert(self, span_id: str, entry: RegistryEntry) -> None:
        """
        Register the entry for a started span.

        Args:
            span_id: Lowercase hex span id
            entry: Native handle, its parent and its kind
        """
        with self._lock:
            self._entries[span_id] = entry

    def pop(self, span_id: str) -> Optional[RegistryEntry]:
        """
        Remove and return the entry for a finished span.

        Args:
            span_id: Lowercase hex span id

        Returns:
            The entry, or None if the span was never registered
        """
        with self._lock:
            return self._entries.pop(span_id, None)

    def get(self, span_id: str) -> Optional[RegistryEntry]:
        with self._lock:
            return self._entries.get(span_id)

    def __contains__(self, span_id: object) -> bool:
        with self._lock:
            return span_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
