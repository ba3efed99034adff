"""
Custom exceptions for cvmatch.

Provides specific error types for the extraction pipeline and the upload
boundary, plus the user-facing message for each failure kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    """User-visible failure categories."""

    UNSUPPORTED_FILE = "unsupported_file"
    EXTRACTION_FAILED = "extraction_failed"
    FILE_TOO_LARGE = "file_too_large"
    EMPTY_FILE = "empty_file"


USER_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNSUPPORTED_FILE: "This file type is not supported. Please upload a PDF, Word or text document.",
    ErrorKind.EXTRACTION_FAILED: "We could not extract any text from this file.",
    ErrorKind.FILE_TOO_LARGE: "This file is too large to upload.",
    ErrorKind.EMPTY_FILE: "The uploaded file is empty.",
}


def user_message(kind: ErrorKind) -> str:
    """Get the user-facing message for a failure kind."""
    return USER_MESSAGES[kind]


class CVMatchError(Exception):
    """Base exception for all cvmatch errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class AdapterFailure(CVMatchError):
    """Raised by a single extraction adapter; the pipeline recovers from it."""

    def __init__(self, adapter_name: str, message: str):
        super().__init__(message, details={"adapter": adapter_name})
        self.adapter_name = adapter_name


@dataclass(frozen=True)
class AdapterError:
    """A recorded adapter failure."""

    adapter_name: str
    error_message: str

    def __str__(self) -> str:
        return f"{self.adapter_name}: {self.error_message}"


class ExtractionFailed(CVMatchError):
    """Raised when no extraction adapter produced any text."""

    def __init__(
        self,
        errors: list[AdapterError],
        kind: ErrorKind = ErrorKind.EXTRACTION_FAILED,
        filename: Optional[str] = None,
    ):
        if errors:
            message = "All extraction methods failed. Errors: " + ", ".join(str(e) for e in errors)
        else:
            message = f"No extraction method can handle file: {filename or 'unknown'}"
        super().__init__(
            message,
            error_code=kind.value,
            details={"filename": filename, "errors": [str(e) for e in errors]},
        )
        self.errors = list(errors)
        self.kind = kind

    @property
    def user_message(self) -> str:
        return user_message(self.kind)


class ValidationFailure(CVMatchError):
    """Raised when an upload is rejected before extraction."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message, error_code=kind.value)
        self.kind = kind

    @property
    def user_message(self) -> str:
        return user_message(self.kind)
