"""
Optical character recognition for scanned PDFs.

Pages are rasterised with pdf2image (poppler) and read with pytesseract.
This is materially slower than the other adapters, so it only applies when
optical recognition is enabled in the extraction settings.
"""

from typing import Any, Optional

from cvmatch.utils.config import ExtractionSettings, get_settings
from cvmatch.utils.constants import MIME_PDF
from cvmatch.utils.logger import get_logger

from .base import ExtractionAdapter

logger = get_logger(__name__)


class OpticalCharacterAdapter(ExtractionAdapter):
    """Recall booster for image-based PDFs."""

    name = "optical_character"
    priority = 3
    mime_types = (MIME_PDF, "application/x-pdf")
    extensions = (".pdf",)

    def __init__(self, settings: Optional[ExtractionSettings] = None):
        self.settings = settings or get_settings().extraction

    def can_handle(self, content, mime_type=None, filename=None) -> bool:
        if not self.settings.enable_optical_recognition:
            return False
        return super().can_handle(content, mime_type, filename)

    def _extract_text(self, content, mime_type, filename) -> tuple[str, dict[str, Any]]:
        import pytesseract
        from pdf2image import convert_from_bytes

        images = convert_from_bytes(content, dpi=self.settings.ocr_dpi)
        logger.debug(f"OCR rasterised {len(images)} page(s) at {self.settings.ocr_dpi} dpi")

        text_parts = []
        for image in images:
            page_text = pytesseract.image_to_string(image, lang=self.settings.ocr_language)
            if page_text and page_text.strip():
                text_parts.append(page_text)

        metadata = {
            "extractor": "tesseract",
            "page_count": len(images),
            "language": self.settings.ocr_language,
        }
        return "\n\n".join(text_parts), metadata
