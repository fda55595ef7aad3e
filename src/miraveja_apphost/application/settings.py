"""
Application host settings using Pydantic.

Provides environment-based configuration loading with APPHOST_ prefix.
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppHostSettings(BaseSettings):
    """Settings consulted while building and publishing an application graph.

    Attributes:
        default_host: Host used for connection strings when no endpoint was allocated.
        connection_strings: Connection strings for connection resources, keyed by
            resource name. Read from ``APPHOST_CONNECTION_STRINGS`` as JSON.
        credential_seed: Optional seed pinning generated credentials.
        manifest_indent: Indentation of the JSON manifest.
        log_level: Level passed to logging configuration.
        log_json: Render logs as JSON lines; console output otherwise.
    """

    model_config = SettingsConfigDict(
        env_prefix="APPHOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_host: str = "localhost"
    connection_strings: Dict[str, str] = Field(default_factory=dict)
    credential_seed: Optional[int] = None
    manifest_indent: Optional[int] = 2
    log_level: str = "INFO"
    log_json: bool = True


@lru_cache
def get_settings() -> AppHostSettings:
    """Get cached settings instance."""
    return AppHostSettings()
