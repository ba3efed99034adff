"""
Utility modules for cvmatch.

This package contains shared utilities used across the application:
- config: Configuration management
- logger: Logging infrastructure
- constants: Application-wide constants
"""

from cvmatch.utils.config import (
    AppSettings,
    ExtractionSettings,
    LoggingSettings,
    ParsingSettings,
    UploadSettings,
    get_settings,
    reload_settings,
)
from cvmatch.utils.constants import (
    APP_NAME,
    VERSION,
    SUPPORTED_RESUME_FORMATS,
    MatchScoreLevel,
    SkillCategory,
)
from cvmatch.utils.logger import (
    setup_logging,
    get_logger,
    audit_log,
    redact,
    log,
)

__all__ = [
    # Config
    "AppSettings",
    "ExtractionSettings",
    "LoggingSettings",
    "ParsingSettings",
    "UploadSettings",
    "get_settings",
    "reload_settings",
    # Constants
    "APP_NAME",
    "VERSION",
    "SUPPORTED_RESUME_FORMATS",
    "MatchScoreLevel",
    "SkillCategory",
    # Logger
    "setup_logging",
    "get_logger",
    "audit_log",
    "redact",
    "log",
]
