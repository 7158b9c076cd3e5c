"""Pydantic models for dumpster configuration.

Mirrors the sections of ``dumpster.toml``: connection profiles, storage
settings, and the retention window.
"""

from typing import Literal

from pydantic import BaseModel, Field


class DatabaseProfile(BaseModel):
    """Database connection profile from dumpster.toml."""

    url: str
    description: str = ""
    db_password: str | None = None  # For [YOUR-PASSWORD] placeholder substitution


class StorageSettings(BaseModel):
    """Where dumps are written."""

    backend: Literal["local", "s3"] = "local"
    bucket: str = ""
    endpoint_url: str | None = None  # S3-compatible services (MinIO, GCS interop)
    region: str = "us-east-1"
    local_root: str = "."


class RetentionSettings(BaseModel):
    """How long dumps are kept."""

    days: int = Field(default=0, ge=0)  # 0 = never purge


class DumpsterConfig(BaseModel):
    """Complete configuration from dumpster.toml."""

    profiles: dict[str, DatabaseProfile] = Field(default_factory=dict)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    retention: RetentionSettings = Field(default_factory=RetentionSettings)
