"""
PDF document text extraction.

Uses two libraries in turn:
1. pdfplumber - Primary method, good for structured text
2. pypdf - Fallback when pdfplumber yields too little or fails
"""

import io
from typing import Any, Optional

from cvmatch.core.exceptions import AdapterFailure
from cvmatch.utils.config import ExtractionSettings, get_settings
from cvmatch.utils.constants import LOW_YIELD_CONFIDENCE_CAP, MIME_PDF
from cvmatch.utils.logger import get_logger

from .base import ExtractionAdapter, text_confidence

logger = get_logger(__name__)

# Pages yielding fewer characters than this on average are probably scanned
MIN_CHARS_PER_PAGE = 100


class StructuredDocumentAdapter(ExtractionAdapter):
    """Primary extractor for page-based documents (PDF)."""

    name = "structured_document"
    priority = 1
    mime_types = (MIME_PDF, "application/x-pdf")
    extensions = (".pdf",)

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        self.settings = settings or get_settings().extraction

    def _extract_text(self, content, mime_type, filename) -> tuple[str, dict[str, Any]]:
        errors = []

        try:
            text, metadata = self._extract_with_pdfplumber(content)
        except Exception as e:
            logger.debug(f"pdfplumber extraction error: {e}")
            errors.append(f"pdfplumber: {e}")
            text, metadata = "", {}

        if len(text.strip()) < self.settings.minimum_text_yield:
            try:
                fallback_text, fallback_meta = self._extract_with_pypdf(content)
            except Exception as e:
                logger.debug(f"pypdf extraction error: {e}")
                errors.append(f"pypdf: {e}")
            else:
                if len(fallback_text.strip()) > len(text.strip()):
                    text, metadata = fallback_text, fallback_meta

        if len(errors) == 2:
            raise AdapterFailure(self.name, "; ".join(errors))

        stripped_length = len(text.strip())
        metadata["insufficient_text"] = stripped_length < self.settings.minimum_text_yield
        if metadata["insufficient_text"]:
            logger.info(
                f"PDF text yield {stripped_length} chars is below "
                f"{self.settings.minimum_text_yield}; document may be image-based"
            )
        return text, metadata

    def assess_confidence(self, text: str, metadata: dict[str, Any]) -> float:
        confidence = text_confidence(text)
        page_count = metadata.get("page_count", 0)
        if page_count and len(text) / page_count < MIN_CHARS_PER_PAGE:
            confidence = min(confidence, LOW_YIELD_CONFIDENCE_CAP)
        return confidence

    def _extract_with_pdfplumber(self, content: bytes) -> tuple[str, dict[str, Any]]:
        """Extract text using pdfplumber."""
        import pdfplumber

        text_parts = []
        metadata: dict[str, Any] = {"extractor": "pdfplumber"}

        with pdfplumber.open(io.BytesIO(content)) as pdf:
            metadata["page_count"] = len(pdf.pages)

            if pdf.metadata:
                metadata["pdf_metadata"] = {
                    k: v for k, v in pdf.metadata.items()
                    if v and isinstance(v, str)
                }

            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)

        return "\n\n".join(text_parts), metadata

    def _extract_with_pypdf(self, content: bytes) -> tuple[str, dict[str, Any]]:
        """Extract text using pypdf."""
        from pypdf import PdfReader

        text_parts = []
        metadata: dict[str, Any] = {"extractor": "pypdf"}

        reader = PdfReader(io.BytesIO(content))
        metadata["page_count"] = len(reader.pages)

        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text_parts.append(page_text)

        return "\n\n".join(text_parts), metadata
