"""Environment-aware configuration with validation.

This module provides centralized configuration management using Pydantic Settings.
Environment variables are validated on first access to fail fast on misconfigurations.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Codec settings loaded from environment variables.

    Settings are cached to avoid repeated parsing.

    Example:
        >>> settings = get_settings()
        >>> print(settings.output_indent)
        '  '
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Validation
    expected_mimetype: str | None = Field(
        default=None,
        alias="ASIC_EXPECTED_MIMETYPE",
        description="Package media type the manifest root entry must declare",
    )
    strict: bool = Field(
        default=False,
        alias="ASIC_STRICT",
        description="Treat soft validation findings as failures in the CLI",
    )

    # Output
    output_indent: str = Field(
        default="  ",
        alias="ASIC_OUTPUT_INDENT",
        description="Indentation used when writing manifest.xml",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    @field_validator("expected_mimetype", mode="before")
    @classmethod
    def empty_mimetype_is_unset(cls, v: str | None) -> str | None:
        """Treat an empty environment value as no expectation."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("output_indent")
    @classmethod
    def validate_output_indent(cls, v: str) -> str:
        """Only allow whitespace indentation that keeps the XML readable."""
        if v != "\t" and (len(v) > 8 or v.strip(" ")):
            raise ValueError("Output indent must be up to 8 spaces or a single tab")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached codec settings.

    Returns:
        Validated Settings instance

    Raises:
        ValidationError: If environment variables are invalid
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when environment variables change.
    """
    get_settings.cache_clear()
