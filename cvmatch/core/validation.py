"""
Upload validation.

Rejects empty, oversized and disallowed files before the extraction
pipeline is invoked.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from cvmatch.core.exceptions import ErrorKind, ValidationFailure
from cvmatch.utils.config import UploadSettings, get_settings
from cvmatch.utils.constants import MIME_TYPES_BY_EXTENSION
from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidatedUpload:
    """An upload that passed validation."""

    filename: str
    extension: str
    size_bytes: int
    mime_type: Optional[str]
    mime_matches_extension: bool


class UploadValidator:
    """Validates uploaded CV files against the configured limits."""

    def __init__(self, settings: Optional[UploadSettings] = None):
        self.settings = settings or get_settings().upload

    @property
    def max_size_mb(self) -> float:
        return self.settings.max_file_size_bytes / (1024 * 1024)

    def validate(
        self,
        content: Optional[bytes],
        filename: Optional[str],
        mime_type: Optional[str] = None,
    ) -> ValidatedUpload:
        """
        Validate an upload.

        A declared MIME type that disagrees with the extension is logged but
        not rejected; the extraction pipeline copes with wrong MIME types.

        Raises:
            ValidationFailure: If the file is empty, too large or of a
                disallowed type
        """
        if not content:
            raise ValidationFailure(ErrorKind.EMPTY_FILE, "File cannot be empty.")

        size = len(content)
        if size > self.settings.max_file_size_bytes:
            raise ValidationFailure(
                ErrorKind.FILE_TOO_LARGE,
                f"File size cannot exceed {self.max_size_mb:g}MB (got {size} bytes).",
            )

        extension = Path(filename or "").suffix.lower()
        if extension not in self.settings.allowed_extensions:
            raise ValidationFailure(
                ErrorKind.UNSUPPORTED_FILE,
                "Only the following file types are allowed: "
                + ", ".join(self.settings.allowed_extensions),
            )

        matches = mime_matches_extension(mime_type, extension)
        if mime_type and not matches:
            logger.warning(f"Declared MIME type {mime_type} does not match extension {extension}")

        return ValidatedUpload(
            filename=filename or "",
            extension=extension,
            size_bytes=size,
            mime_type=mime_type,
            mime_matches_extension=matches,
        )


def mime_matches_extension(mime_type: Optional[str], extension: str) -> bool:
    """Whether a declared MIME type is the expected one for an extension."""
    if not mime_type:
        return False
    expected = MIME_TYPES_BY_EXTENSION.get(extension.lower())
    declared = mime_type.split(";")[0].strip().lower()
    if extension.lower() == ".rtf":
        return declared in ("application/rtf", "text/rtf")
    return expected is not None and declared == expected
