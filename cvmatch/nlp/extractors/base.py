"""
Base adapter class for document text extraction.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from cvmatch.core.exceptions import AdapterFailure
from cvmatch.nlp.preprocessor import clean_text
from cvmatch.utils.constants import TEXT_CONFIDENCE_MAX, TEXT_CONFIDENCE_STEPS
from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)


def text_confidence(text: str) -> float:
    """Confidence for extracted text: monotonic in length, saturating at 0.9."""
    length = len(text or "")
    for upper_bound, confidence in TEXT_CONFIDENCE_STEPS:
        if length < upper_bound:
            return confidence
    return TEXT_CONFIDENCE_MAX


@dataclass(frozen=True)
class ExtractionResult:
    """Result of one adapter's attempt at a document."""

    text: str
    confidence: float
    adapter_name: str
    duration_ms: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def word_count(self) -> int:
        """Count words in extracted text."""
        return len(self.text.split())

    @property
    def char_count(self) -> int:
        """Count characters in extracted text."""
        return len(self.text)

    @property
    def is_empty(self) -> bool:
        """Check if extraction resulted in empty text."""
        return len(self.text.strip()) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "adapterName": self.adapter_name,
            "confidence": self.confidence,
            "durationMs": self.duration_ms,
            "textLength": self.char_count,
            "metadata": dict(self.metadata),
        }


class ExtractionAdapter(ABC):
    """
    Abstract base class for extraction adapters.

    Subclasses declare which files they apply to and implement
    ``_extract_text``; ``extract`` takes care of cleaning, timing, confidence
    and turning library errors into ``AdapterFailure``.
    """

    name: str = "adapter"
    priority: int = 100
    mime_types: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()

    def can_handle(
        self,
        content: bytes,
        mime_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> bool:
        """Cheap applicability test on MIME type or file extension; never parses."""
        if mime_type and mime_type.split(";")[0].strip().lower() in self.mime_types:
            return True
        if filename:
            return Path(filename).suffix.lower() in self.extensions
        return False

    def extract(
        self,
        content: bytes,
        mime_type: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract and clean text from document bytes.

        Args:
            content: Raw bytes of the document
            mime_type: Declared MIME type, possibly wrong or missing
            filename: Original filename

        Returns:
            ExtractionResult for this adapter

        Raises:
            AdapterFailure: If the document could not be read
        """
        start = time.perf_counter()
        try:
            raw_text, metadata = self._extract_text(content, mime_type, filename)
        except AdapterFailure:
            raise
        except Exception as e:
            raise AdapterFailure(self.name, f"{type(e).__name__}: {e}") from e

        text = clean_text(raw_text)
        if not text:
            raise AdapterFailure(self.name, "No text extracted")
        duration_ms = int((time.perf_counter() - start) * 1000)
        return ExtractionResult(
            text=text,
            confidence=self.assess_confidence(text, metadata),
            adapter_name=self.name,
            duration_ms=duration_ms,
            metadata=metadata,
        )

    def assess_confidence(self, text: str, metadata: dict[str, Any]) -> float:
        """Self-assessed confidence; adapters may override with their own signals."""
        return text_confidence(text)

    @abstractmethod
    def _extract_text(
        self,
        content: bytes,
        mime_type: Optional[str],
        filename: Optional[str],
    ) -> tuple[str, dict[str, Any]]:
        """Return raw (uncleaned) text and adapter metadata."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, priority={self.priority})"
