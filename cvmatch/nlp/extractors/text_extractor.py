"""
Plain text and RTF document extraction.
"""

import codecs
from pathlib import Path
from typing import Any, Optional

from cvmatch.utils.constants import MIME_MARKDOWN, MIME_RTF, MIME_TEXT
from cvmatch.utils.logger import get_logger

from .base import ExtractionAdapter

logger = get_logger(__name__)

RTF_EXTENSIONS = (".rtf",)

FALLBACK_ENCODINGS = ("utf-8", "cp1252")


class PlainTextAdapter(ExtractionAdapter):
    """Byte-to-string decode for plain text, Markdown and RTF files."""

    name = "plain_text"
    priority = 4
    mime_types = (MIME_TEXT, MIME_MARKDOWN, *MIME_RTF)
    extensions = (".txt", ".text", ".md", *RTF_EXTENSIONS)

    def _extract_text(self, content, mime_type, filename) -> tuple[str, dict[str, Any]]:
        text, encoding = decode_bytes(content)

        if self._is_rtf(content, mime_type, filename):
            from striprtf.striprtf import rtf_to_text

            return rtf_to_text(text), {"extractor": "striprtf", "encoding": encoding}

        return text, {"extractor": "plain_text", "encoding": encoding}

    @staticmethod
    def _is_rtf(content: bytes, mime_type: Optional[str], filename: Optional[str]) -> bool:
        if content.lstrip()[:5] == b"{\\rtf":
            return True
        if mime_type and mime_type.split(";")[0].strip().lower() in MIME_RTF:
            return True
        return bool(filename) and Path(filename).suffix.lower() in RTF_EXTENSIONS


def decode_bytes(content: bytes) -> tuple[str, str]:
    """
    Decode bytes to text.

    UTF-16 is only used when a byte-order mark says so; otherwise UTF-8 is
    tried before the single-byte Windows and Latin-1 code pages.

    Returns:
        Tuple of (text, encoding used)
    """
    if content.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return content.decode("utf-16"), "utf-16"
    if content.startswith(codecs.BOM_UTF8):
        return content.decode("utf-8-sig"), "utf-8-sig"

    for encoding in FALLBACK_ENCODINGS:
        try:
            return content.decode(encoding), encoding
        except UnicodeDecodeError:
            continue

    # latin-1 maps every byte
    return content.decode("latin-1"), "latin-1"
