"""
Configuration models for the monitoring client consumed by the bridge.
"""

import os
from enum import Enum
from typing import Optional, Union
from urllib.parse import urlsplit
from pydantic import BaseModel, Field, field_validator


class Instrumenter(str, Enum):
    """Which tracer drives span creation in the monitoring client."""
    NATIVE = "native"
    OTEL = "otel"


class Dsn(BaseModel):
    """Parsed destination endpoint of the monitoring client."""
    scheme: str = Field(..., description="URL scheme, http or https")
    public_key: str = Field(..., description="Public key from the URL user info")
    host: str = Field(..., description="Host telemetry is uploaded to")
    port: Optional[int] = Field(None, description="Explicit port, if any")
    project_id: str = Field(..., description="Project identifier, last path segment")

    class Config:
        """Pydantic configuration."""
        frozen = True

    @classmethod
    def parse(cls, value: str) -> "Dsn":
        """
        Parse a DSN string of the form ``scheme://key@host[:port]/[path/]project``.

        Args:
            value: The DSN string

        Returns:
            Parsed Dsn

        Raises:
            ValueError: If a required part is missing
        """
        parts = urlsplit(value.strip())
        if parts.scheme not in ("http", "https"):
            raise ValueError(f"Unsupported DSN scheme '{parts.scheme}'")
        if not parts.username:
            raise ValueError("DSN is missing a public key")
        if not parts.hostname:
            raise ValueError("DSN is missing a host")

        project_id = parts.path.rstrip("/").rsplit("/", 1)[-1]
        if not project_id:
            raise ValueError("DSN is missing a project id")

        return cls(
            scheme=parts.scheme,
            public_key=parts.username,
            host=parts.hostname,
            port=parts.port,
            project_id=project_id,
        )

    def __str__(self) -> str:
        netloc = f"{self.host}:{self.port}" if self.port else self.host
        return f"{self.scheme}://{self.public_key}@{netloc}/{self.project_id}"


class MonitoringOptions(BaseModel):
    """Options of the monitoring client that the bridge reads."""
    dsn: Optional[Dsn] = Field(None, description="Destination endpoint, None when not configured")
    instrumenter: Instrumenter = Field(Instrumenter.NATIVE, description="Tracer driving span creation")
    enabled: bool = Field(True, description="Whether the client accepts new spans")

    @field_validator("dsn", mode="before")
    @classmethod
    def _parse_dsn(cls, value: Union[str, Dsn, None]):
        if isinstance(value, str):
            return Dsn.parse(value) if value.strip() else None
        return value

    @classmethod
    def from_env(cls, prefix: str = "MONITORING_") -> "MonitoringOptions":
        """
        Build options from environment variables.

        Reads ``<prefix>DSN``, ``<prefix>INSTRUMENTER`` and ``<prefix>ENABLED``.
        """
        enabled = os.getenv(f"{prefix}ENABLED", "true").strip().lower() not in ("0", "false", "no")
        return cls(
            dsn=os.getenv(f"{prefix}DSN"),
            instrumenter=os.getenv(f"{prefix}INSTRUMENTER", Instrumenter.NATIVE.value).strip().lower(),
            enabled=enabled,
        )
