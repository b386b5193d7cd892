"""Application configuration via Pydantic Settings.

Settings are read from environment variables and an optional ``.env`` file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit stderr log records as JSON",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.strip().upper() not in _LOG_LEVELS:
            msg = f"Invalid log_level: must be one of {sorted(_LOG_LEVELS)}"
            raise ValueError(msg)
        return v.strip().upper()

    # Place matching
    default_radius_meters: float = Field(
        default=0.0,
        description="Tolerance radius for Point places when none is given (0 = exact match only)",
        ge=0,
    )

    # Output
    coordinate_precision: int = Field(
        default=6,
        description="Decimal digits used when rendering coordinates",
        ge=0,
        le=15,
    )


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
