"""
Unit tests for the span registry.
"""

import threading

from otel_span_bridge.models import HandleKind, RegistryEntry
from otel_span_bridge.registry import SpanRegistry


def make_entry(handle="handle", parent=None, kind=HandleKind.SPAN):
    return RegistryEntry(handle=handle, parent=parent, kind=kind)


class TestSpanRegistry:
    """Test cases for SpanRegistry."""

    def test_insert_and_pop(self):
        """Test an inserted entry is returned once and then removed."""
        registry = SpanRegistry()
        entry = make_entry()

        registry.insert("aaaaaaaaaaaaaaaa", entry)

        assert "aaaaaaaaaaaaaaaa" in registry
        assert len(registry) == 1
        assert registry.pop("aaaaaaaaaaaaaaaa") is entry
        assert registry.pop("aaaaaaaaaaaaaaaa") is None
        assert len(registry) == 0

    def test_pop_unknown_id(self):
        """Test popping an id that was never inserted returns None."""
        assert SpanRegistry().pop("bbbbbbbbbbbbbbbb") is None

    def test_get_does_not_remove(self):
        """Test get leaves the entry in place."""
        registry = SpanRegistry()
        registry.insert("aaaaaaaaaaaaaaaa", make_entry())

        assert registry.get("aaaaaaaaaaaaaaaa") is not None
        assert "aaaaaaaaaaaaaaaa" in registry

    def test_concurrent_insert_and_pop(self):
        """Test inserts and pops from many threads leave no entries behind."""
        registry = SpanRegistry()
        popped = []
        lock = threading.Lock()

        def worker(offset):
            for i in range(200):
                span_id = f"{offset:08x}{i:08x}"
                registry.insert(span_id, make_entry(handle=span_id))
                entry = registry.pop(span_id)
                with lock:
                    popped.append(entry.handle)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 0
        assert len(popped) == 8 * 200
        assert len(set(popped)) == 8 * 200
