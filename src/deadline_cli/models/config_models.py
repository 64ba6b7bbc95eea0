"""Configuration models for Deadline CLI.

The configuration is a single JSON document validated by ``AppConfig``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Local storage configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite file path (defaults to the user data dir)"
    )


class ShareConfig(BaseModel):
    """Share link configuration."""

    base_url: str = Field(default="http://localhost:8080")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("base_url cannot be empty")
        return v.strip().rstrip("/")


class FocusConfig(BaseModel):
    """Focus timer configuration."""

    focus_minutes: int = Field(default=25, ge=1, le=240)
    break_minutes: int = Field(default=5, ge=1, le=60)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main Deadline CLI configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    share: ShareConfig = Field(default_factory=ShareConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
