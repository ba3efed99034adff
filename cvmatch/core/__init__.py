"""
Core business logic for cvmatch.

Salary banding, the error taxonomy, upload validation, candidate import
and match scoring (``cvmatch.core.matching``).
"""

from .exceptions import (
    AdapterError,
    AdapterFailure,
    CVMatchError,
    ErrorKind,
    ExtractionFailed,
    ValidationFailure,
    user_message,
)
from .salary_banding import band_label, band_value, default_max, resolve_range

__all__ = [
    "AdapterError",
    "AdapterFailure",
    "CVMatchError",
    "ErrorKind",
    "ExtractionFailed",
    "ValidationFailure",
    "user_message",
    "band_label",
    "band_value",
    "default_max",
    "resolve_range",
]
