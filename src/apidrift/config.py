"""
Centralized configuration for apidrift.

Uses Pydantic BaseSettings for environment variable integration
and validation.

Configuration sources (in order of precedence):
1. Explicit constructor arguments (CLI options are passed this way)
2. Environment variables (APIDRIFT_*)
3. .env file
4. Default values

Example:
    from apidrift.config import get_config

    config = get_config()
    print(config.storage_dir)  # From APIDRIFT_STORAGE_DIR or default

    # Override at runtime
    config = get_config(storage_dir="/tmp/drift")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiDriftConfig(BaseSettings):
    """
    Central configuration for apidrift.

    All settings can be overridden via environment variables
    prefixed with APIDRIFT_.

    Example:
        export APIDRIFT_STORAGE_DIR=/var/lib/apidrift
        export APIDRIFT_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="APIDRIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Report history
    storage_dir: str = Field(
        default=".drift-reports",
        description="Directory holding stored reports and run indexes",
    )
    storage_type: Literal["file", "memory"] = Field(
        default="file",
        description="Report storage backend",
    )
    history_limit: int = Field(
        default=5,
        ge=1,
        description="Number of recent runs consulted when building trends",
    )
    index_limit: int = Field(
        default=100,
        ge=1,
        description="Maximum index entries kept per service/environment",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        description="Logging level for apidrift",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log output format (json for log shippers, text for console)",
    )

    # Telemetry
    otel_enabled: bool = Field(
        default=True,
        description="Emit span events when an OTel span is recording",
    )

    @field_validator("storage_dir")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ and environment variables in paths."""
        return os.path.expanduser(os.path.expandvars(v))

    def get_storage_path(self) -> Path:
        """Get the storage directory as a path."""
        return Path(self.storage_dir)


# Global singleton
_config: Optional[ApiDriftConfig] = None


def get_config(**overrides) -> ApiDriftConfig:
    """
    Get the global configuration instance.

    Creates a singleton on first call. Subsequent calls return
    the same instance unless overrides are provided.

    Args:
        **overrides: Override any config values

    Returns:
        ApiDriftConfig instance
    """
    global _config

    if overrides or _config is None:
        _config = ApiDriftConfig(**overrides)

    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
