"""Pydantic Settings for the status-line segment collectors.

Environment variables use the CCLINE_ prefix.
Example: CCLINE_CLAUDE_DIR=/tmp/claude, CCLINE_REQUEST_TIMEOUT_SECONDS=2.5

Tracing is the exception: it is switched on by the mere presence of
PACKYCODE_DEBUG (or CCLINE_DEBUG), whatever its value.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

# Credential environment variables, in resolution order
TOOL_API_KEY_ENV = "PACKYCODE_API_KEY"
PROVIDER_API_KEY_ENV = "ANTHROPIC_API_KEY"
PROVIDER_AUTH_TOKEN_ENV = "ANTHROPIC_AUTH_TOKEN"


class CclineSettings(BaseSettings):
    """Status line configuration validated from environment variables."""

    # Per-user config root holding settings.json and api_key
    claude_dir: Path = Field(default_factory=lambda: Path.home() / ".claude")

    # Endpoint cache / endpoint list overrides
    cache_file: Path | None = None
    endpoints_file: Path | None = None

    # Endpoint detection
    request_timeout_seconds: float = Field(default=5.0, gt=0)
    cache_ttl_seconds: int = Field(default=86400, ge=1)  # 24 hours

    # Logging
    log_level: str = "WARNING"
    debug: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PACKYCODE_DEBUG", "CCLINE_DEBUG"),
    )

    model_config = {"env_prefix": "CCLINE_", "populate_by_name": True}

    @property
    def debug_enabled(self) -> bool:
        return self.debug is not None

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_enabled else self.log_level

    @property
    def settings_path(self) -> Path:
        return self.claude_dir / "settings.json"

    @property
    def api_key_path(self) -> Path:
        return self.claude_dir / "api_key"

    @property
    def endpoint_cache_path(self) -> Path:
        if self.cache_file is not None:
            return self.cache_file
        return self.claude_dir / "ccline" / "endpoint_cache.json"
