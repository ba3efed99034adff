"""
Universal best-effort text extraction.

Last resort for any file the specialised adapters could not read. textract
is tried first and covers legacy formats such as binary .doc. When it is
not installed or fails, the content is sniffed and handed to the document
libraries directly:
- zip containers: DOCX through python-docx, otherwise the first readable member
- PDFs: pypdf in non-strict mode
- RTF: striprtf
- anything else: decoded as text
"""

import io
import tempfile
import zipfile
from pathlib import Path
from typing import Any, Optional

from cvmatch.core.exceptions import AdapterFailure
from cvmatch.utils.logger import get_logger

from .base import ExtractionAdapter
from .docx_extractor import WordProcessorAdapter
from .text_extractor import decode_bytes

logger = get_logger(__name__)

OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

# Archive members worth opening, in the order they are considered
ARCHIVE_MEMBER_SUFFIXES = (".docx", ".pdf", ".rtf", ".txt", ".text", ".md")


class UniversalFallbackAdapter(ExtractionAdapter):
    """Lowest-priority adapter, applicable to every file."""

    name = "universal_fallback"
    priority = 10

    def can_handle(self, content, mime_type=None, filename=None) -> bool:
        return True

    def _extract_text(self, content, mime_type, filename) -> tuple[str, dict[str, Any]]:
        if not content:
            raise AdapterFailure(self.name, "File is empty")

        errors = []
        try:
            text = self._extract_with_textract(content, filename)
            if text.strip():
                return text, {"extractor": "textract"}
            errors.append("textract: no text")
        except ImportError:
            errors.append("textract: not installed")
        except Exception as e:
            logger.debug(f"textract failed: {e}")
            errors.append(f"textract: {e}")

        try:
            text, method = self._extract_by_type(content)
        except Exception as e:
            errors.append(f"{type(e).__name__}: {e}")
            raise AdapterFailure(self.name, "; ".join(errors)) from e

        logger.debug(f"Fallback extraction used {method} ({'; '.join(errors)})")
        return text, {"extractor": method}

    def _extract_with_textract(self, content: bytes, filename: Optional[str]) -> str:
        """Run textract on a temporary copy named with a usable extension."""
        import textract

        suffix = guess_suffix(content, filename)
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / f"upload{suffix}"
            path.write_bytes(content)
            return textract.process(str(path)).decode("utf-8", errors="ignore")

    def _extract_by_type(self, content: bytes) -> tuple[str, str]:
        """Extract with the library matching the sniffed format."""
        if content.lstrip()[:5] == b"%PDF-":
            return self._extract_pdf(content), "pypdf"
        if zipfile.is_zipfile(io.BytesIO(content)):
            return self._extract_zip(content)
        if content.startswith(OLE_MAGIC):
            raise ValueError("Legacy binary document requires textract")
        if content.lstrip()[:5] == b"{\\rtf":
            from striprtf.striprtf import rtf_to_text

            return rtf_to_text(decode_bytes(content)[0]), "striprtf"

        text, encoding = decode_bytes(content)
        return text, f"plain_text:{encoding}"

    def _extract_pdf(self, content: bytes) -> str:
        from pypdf import PdfReader

        reader = PdfReader(io.BytesIO(content), strict=False)
        return "\n".join(page.extract_text() or "" for page in reader.pages)

    def _extract_zip(self, content: bytes) -> tuple[str, str]:
        """DOCX packages go to python-docx; other archives yield their first readable member."""
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            names = [name for name in archive.namelist() if not name.endswith("/")]
            if "word/document.xml" in names:
                from docx import Document

                text, _ = WordProcessorAdapter()._process_document(Document(io.BytesIO(content)))
                return text, "python-docx"

            members = sorted(
                (name for name in names if Path(name).suffix.lower() in ARCHIVE_MEMBER_SUFFIXES),
                key=lambda name: ARCHIVE_MEMBER_SUFFIXES.index(Path(name).suffix.lower()),
            )
            for name in members:
                try:
                    text, method = self._extract_by_type(archive.read(name))
                except Exception as e:
                    logger.debug(f"Skipping archive member {name}: {e}")
                    continue
                if text.strip():
                    return text, f"zip:{name}:{method}"

        raise ValueError("No readable document in archive")


def guess_suffix(content: bytes, filename: Optional[str]) -> str:
    """File extension for content, from its name or else its leading bytes."""
    if filename and Path(filename).suffix:
        return Path(filename).suffix.lower()
    if content.lstrip()[:5] == b"%PDF-":
        return ".pdf"
    if content.startswith(OLE_MAGIC):
        return ".doc"
    if content.lstrip()[:5] == b"{\\rtf":
        return ".rtf"
    if zipfile.is_zipfile(io.BytesIO(content)):
        return ".docx"
    return ".txt"
