"""
Configuration management for cvmatch.

Uses Pydantic Settings for type-safe configuration with environment variable support.
Components receive one of these settings objects explicitly; ``get_settings()``
is only the default when a caller does not pass one.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExtractionSettings(BaseSettings):
    """Text extraction pipeline configuration."""

    model_config = SettingsConfigDict(env_prefix="EXTRACTION_", populate_by_name=True)

    # Optical recognition is slow, so it stays off unless explicitly enabled
    enable_optical_recognition: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "enable_optical_recognition",
            "EXTRACTION_ENABLE_OPTICAL_RECOGNITION",
            "ENABLE_OCR",
        ),
    )

    # Structured documents below this many characters escalate to fallbacks
    minimum_text_yield: int = Field(default=400, ge=0)

    # "Good enough" short-circuit rule
    good_enough_confidence: float = Field(default=0.7, ge=0, le=1)
    good_enough_length: int = Field(default=500, ge=0)

    # Total pipeline budget in milliseconds (None = unbounded)
    timeout_ms: Optional[int] = Field(default=None, gt=0)

    # OCR
    ocr_language: str = "eng"
    ocr_dpi: int = Field(default=300, gt=0)


class ParsingSettings(BaseSettings):
    """Candidate attribute extraction configuration."""

    model_config = SettingsConfigDict(env_prefix="PARSING_")

    # Texts shorter than this get their confidence capped
    minimum_text_yield: int = Field(default=300, ge=0)

    # Header region used for phone preference and title/employer fallback
    header_region_chars: int = Field(default=500, gt=0)
    header_region_lines: int = Field(default=15, gt=0)

    # Notes
    notes_max_chars: int = Field(default=200, gt=0)
    notes_source_lines: int = Field(default=5, gt=0)


class UploadSettings(BaseSettings):
    """Upload validation limits."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    max_file_size_bytes: int = Field(default=10 * 1024 * 1024, gt=0)  # 10MB
    allowed_extensions: tuple[str, ...] = (".pdf", ".docx", ".doc", ".txt", ".rtf", ".md")

    @field_validator("allowed_extensions")
    @classmethod
    def normalize_extensions(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Lowercase extensions and make sure they start with a dot."""
        return tuple(
            ext.lower() if ext.startswith(".") else f".{ext.lower()}"
            for ext in v
        )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
    # Relative to the working directory
    file_path: Path = Path("logs") / "cvmatch.log"
    rotation: str = "10 MB"
    retention: str = "30 days"
    console_output: bool = True
    file_output: bool = True


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    name: str = "cvmatch"
    version: str = "0.1.0"
    description: str = "CV extraction and candidate/job match scoring"
    debug: bool = False

    # Environment
    environment: Literal["development", "production", "testing"] = "development"

    # Nested settings
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    parsing: ParsingSettings = Field(default_factory=ParsingSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


# Global settings instance (singleton pattern)
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reload_settings() -> AppSettings:
    """Force reload settings from environment."""
    global _settings
    _settings = AppSettings()
    return _settings
