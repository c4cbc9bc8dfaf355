"""
Configuration Management for rankmerge.

Provides type-safe configuration loading using Pydantic Settings.
Supports environment variables (prefix ``RANKMERGE_``), .env files and
defaults that work without any configuration.

License: MIT
"""

from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RankMergeSettings(BaseSettings):
    """
    Settings for the rankmerge command-line tool.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (``RANKMERGE_LOG_LEVEL`` etc.)
    2. .env file in the working directory
    3. Hardcoded default values

    Command-line flags override every settings value.

    Example:
        ```python
        from rankmerge_core.config import RankMergeSettings

        settings = RankMergeSettings()
        print(settings.default_strategy)  # 'combmnz'
        print(settings.rrf_k)  # 60
        ```
    """

    # ========================================
    # FUSION CONFIGURATION
    # ========================================

    default_strategy: str = Field(
        default="combmnz", description="Fusion strategy used when none is given"
    )

    rrf_k: int = Field(
        default=60, ge=1, le=10_000, description="Smoothing constant for Reciprocal Rank Fusion"
    )

    normalize: bool = Field(
        default=True, description="Min-max normalize scores before score-based fusion"
    )

    depth: Optional[int] = Field(
        default=None, ge=1, description="Keep only the top N fused results per query"
    )

    max_workers: Optional[int] = Field(
        default=None, ge=1, le=256, description="Worker threads for fusing queries"
    )

    # ========================================
    # OUTPUT CONFIGURATION
    # ========================================

    run_id: str = Field(
        default="rankmerge", min_length=1, description="Run tag written in fused TREC output"
    )

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(default="json", description="Log output format (json or console)")

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("default_strategy")
    @classmethod
    def normalize_strategy_name(cls, v: str) -> str:
        """Strategy names are case-insensitive."""
        v = v.strip().lower()
        if not v:
            raise ValueError("default_strategy cannot be empty")
        return v

    @field_validator("run_id")
    @classmethod
    def validate_run_id(cls, v: str) -> str:
        """Run tags are single TREC fields and cannot contain whitespace."""
        if any(ch.isspace() for ch in v):
            raise ValueError(f"run_id cannot contain whitespace: {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is json or console."""
        v_lower = v.lower()
        if v_lower not in ["json", "console"]:
            raise ValueError(f"log_format must be 'json' or 'console', got '{v}'")
        return v_lower

    model_config = SettingsConfigDict(
        env_prefix="RANKMERGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )


def get_config_summary(settings: RankMergeSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: RankMergeSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "fusion": {
            "default_strategy": settings.default_strategy,
            "rrf_k": settings.rrf_k,
            "normalize": settings.normalize,
            "depth": settings.depth,
            "max_workers": settings.max_workers,
        },
        "output": {
            "run_id": settings.run_id,
        },
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
    }
