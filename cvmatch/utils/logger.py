"""
Logging infrastructure for cvmatch.

Uses Loguru for logging with automatic rotation, structured output,
and a separate audit sink for import and scoring decisions.
"""

import sys
from typing import Any

from loguru import logger

from cvmatch.utils.config import get_settings


def setup_logging() -> None:
    """
    Configure application-wide logging.

    Sets up console and file logging with appropriate formatting,
    rotation, and retention policies.
    """
    settings = get_settings()
    log_settings = settings.logging

    # Remove default handler
    logger.remove()

    # Security: diagnose=False outside development to keep candidate data out of stack traces
    enable_diagnose = settings.debug and settings.environment == "development"

    if log_settings.console_output:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>",
            level=log_settings.level,
            colorize=True,
            backtrace=True,
            diagnose=enable_diagnose,
        )

    if not log_settings.file_output:
        logger.info(f"Logging initialized - Level: {log_settings.level}")
        return

    # File handler with rotation
    log_file = log_settings.file_path
    log_file.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=log_settings.format,
        level=log_settings.level,
        rotation=log_settings.rotation,
        retention=log_settings.retention,
        compression="zip",
        backtrace=True,
        diagnose=enable_diagnose,
        enqueue=True,  # Thread-safe logging
    )

    # Audit log for candidate import and scoring decisions
    audit_log_path = log_file.parent / "audit.log"
    logger.add(
        audit_log_path,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[audit_type]} | {message}",
        level="INFO",
        filter=lambda record: "audit_type" in record["extra"],
        rotation="1 week",
        retention="1 year",
        compression="zip",
        enqueue=True,
    )

    logger.info(f"Logging initialized - Level: {log_settings.level}")


def get_logger(name: str) -> Any:
    """
    Get a logger instance with the specified name.

    Args:
        name: The name for the logger (typically __name__)

    Returns:
        A configured logger instance
    """
    return logger.bind(name=name)


# Keys whose values never reach a log sink in clear text
SENSITIVE_SUBSTRINGS = (
    "password", "secret", "token", "api_key", "apikey", "credential",
    "email", "phone",
)
SENSITIVE_KEYS = {"name", "first_name", "last_name", "full_name", "firstname", "lastname"}


def _is_sensitive(key: Any) -> bool:
    key = str(key).lower()
    return key in SENSITIVE_KEYS or any(s in key for s in SENSITIVE_SUBSTRINGS)


def redact(value: Any) -> Any:
    """
    Sanitize data before logging to prevent candidate PII exposure.

    Redacts contact details, names and secrets in nested dicts and lists.
    """
    if isinstance(value, dict):
        return {
            k: "***REDACTED***" if _is_sensitive(k) and v else redact(v)
            for k, v in value.items()
        }
    elif isinstance(value, list):
        return [redact(item) for item in value]
    return value


def audit_log(
    action: str,
    details: dict[str, Any],
    audit_type: str = "DECISION",
) -> None:
    """
    Log an audit entry.

    Args:
        action: The action being audited (e.g., "candidate_imported", "candidate_scored")
        details: Dictionary of relevant details
        audit_type: Type of audit entry (DECISION, IMPORT, ACCESS)
    """
    logger.bind(audit_type=audit_type).info(f"{action} | {redact(details)}")


# Module-level logger for quick access
log = logger


# Auto-setup on import if settings are available
try:
    setup_logging()
except Exception as e:
    # If setup fails (e.g., unwritable log directory), keep loguru's default sink
    logger.warning(f"Logging setup failed, using default sink: {e}")
