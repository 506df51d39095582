"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() to share one cached instance.

Usage:
    from engine.settings import get_settings, Settings

    settings = get_settings()
    print(settings.auto_advance_delay_seconds)

    # Tests: explicit values, no .env file
    settings = Settings(auto_advance_delay_ms=0, _env_file=None)
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production, test",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level used by the CLI",
    )

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------
    auto_advance_delay_ms: int = Field(
        default=300,
        ge=0,
        description="Delay between completing a set and moving to the next one (completion animation)",
    )
    default_set_rest_seconds: int = Field(
        default=60,
        ge=0,
        description="Rest between sets for new exercises",
    )
    default_round_rest_seconds: int = Field(
        default=90,
        ge=0,
        description="Rest between rounds when a superset does not configure one",
    )
    default_exercise_rest_seconds: int = Field(
        default=20,
        ge=0,
        description="Rest between exercises proposed for new circuits",
    )

    # -------------------------------------------------------------------------
    # Timers
    # -------------------------------------------------------------------------
    timer_tick_ms: int = Field(
        default=100,
        gt=0,
        description="Interval between timer ticks driven by the host loop",
    )

    # -------------------------------------------------------------------------
    # Supabase Database (external workout store)
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )
    workouts_table: str = Field(
        default="workouts",
        description="Table holding workout records",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is a standard logging level name."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def auto_advance_delay_seconds(self) -> float:
        """Auto-advance delay in seconds, as expected by the scheduler."""
        return self.auto_advance_delay_ms / 1000.0

    @property
    def timer_tick_seconds(self) -> float:
        return self.timer_tick_ms / 1000.0

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
