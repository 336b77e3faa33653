"""
Unit tests for option and identity models.
"""

import pytest
from pydantic import ValidationError

from otel_span_bridge.models import (
    Dsn,
    HandleKind,
    Instrumenter,
    MonitoringOptions,
    RegistryEntry,
    TraceData,
)


class TestDsn:
    """Test cases for Dsn parsing."""

    def test_parse_valid_dsn(self):
        """Test parsing a DSN with key, host and project."""
        dsn = Dsn.parse("https://abc123@o11.ingest.monitoring.example.com/42")

        assert dsn.scheme == "https"
        assert dsn.public_key == "abc123"
        assert dsn.host == "o11.ingest.monitoring.example.com"
        assert dsn.port is None
        assert dsn.project_id == "42"

    def test_parse_dsn_with_port_and_path(self):
        """Test parsing a DSN with explicit port and path prefix."""
        dsn = Dsn.parse("http://key@localhost:9000/monitoring/7")

        assert dsn.host == "localhost"
        assert dsn.port == 9000
        assert dsn.project_id == "7"
        assert str(dsn) == "http://key@localhost:9000/7"

    @pytest.mark.parametrize("value", [
        "ftp://key@host/1",
        "https://host/1",
        "https://key@host/",
    ])
    def test_parse_invalid_dsn(self, value):
        """Test malformed DSNs are rejected."""
        with pytest.raises(ValueError):
            Dsn.parse(value)


class TestMonitoringOptions:
    """Test cases for MonitoringOptions."""

    def test_defaults(self):
        """Test options default to the native instrumenter without DSN."""
        options = MonitoringOptions()

        assert options.dsn is None
        assert options.instrumenter == Instrumenter.NATIVE
        assert options.enabled is True

    def test_dsn_string_is_parsed(self):
        """Test a DSN string is converted into a Dsn."""
        options = MonitoringOptions(dsn="https://abc@example.com/1", instrumenter="otel")

        assert options.dsn.host == "example.com"
        assert options.instrumenter == Instrumenter.OTEL

    def test_blank_dsn_is_none(self):
        """Test an empty DSN string means no DSN."""
        assert MonitoringOptions(dsn="  ").dsn is None

    def test_invalid_dsn_raises_validation_error(self):
        """Test a malformed DSN fails validation."""
        with pytest.raises(ValidationError):
            MonitoringOptions(dsn="not a dsn")

    def test_invalid_instrumenter_raises_validation_error(self):
        """Test an unknown instrumenter fails validation."""
        with pytest.raises(ValidationError):
            MonitoringOptions(instrumenter="zipkin")

    def test_from_env(self, monkeypatch):
        """Test options are read from prefixed environment variables."""
        monkeypatch.setenv("MONITORING_DSN", "https://abc@example.com/1")
        monkeypatch.setenv("MONITORING_INSTRUMENTER", "OTEL")
        monkeypatch.setenv("MONITORING_ENABLED", "false")

        options = MonitoringOptions.from_env()

        assert options.dsn.host == "example.com"
        assert options.instrumenter == Instrumenter.OTEL
        assert options.enabled is False

    def test_from_env_defaults(self, monkeypatch):
        """Test missing environment variables fall back to defaults."""
        for name in ("MONITORING_DSN", "MONITORING_INSTRUMENTER", "MONITORING_ENABLED"):
            monkeypatch.delenv(name, raising=False)

        options = MonitoringOptions.from_env()

        assert options.dsn is None
        assert options.instrumenter == Instrumenter.NATIVE
        assert options.enabled is True


class TestIdentityModels:
    """Test cases for TraceData and RegistryEntry."""

    def test_trace_data_is_frozen(self):
        """Test TraceData cannot be modified after creation."""
        trace_data = TraceData(span_id="aaaaaaaaaaaaaaaa")

        with pytest.raises(ValidationError):
            trace_data.span_id = "bbbbbbbbbbbbbbbb"

    def test_registry_entry_keeps_handles(self):
        """Test RegistryEntry stores the exact handle objects."""
        handle, parent = object(), object()

        entry = RegistryEntry(handle=handle, parent=parent, kind=HandleKind.SPAN)

        assert entry.handle is handle
        assert entry.parent is parent
        assert entry.kind == HandleKind.SPAN

    def test_registry_entry_requires_kind(self):
        """Test RegistryEntry validation fails without a kind."""
        with pytest.raises(ValidationError):
            RegistryEntry(handle=object())
