"""
Word-processor document text extraction.

Uses python-docx for DOCX (XML-in-zip) files. Legacy binary .doc files are
left to the universal fallback.
"""

import io
from typing import Any

from cvmatch.utils.constants import MIME_DOCX
from cvmatch.utils.logger import get_logger

from .base import ExtractionAdapter

logger = get_logger(__name__)


class WordProcessorAdapter(ExtractionAdapter):
    """Primary extractor for Word documents (.docx)."""

    name = "word_processor"
    priority = 2
    mime_types = (MIME_DOCX,)
    extensions = (".docx",)

    def _extract_text(self, content, mime_type, filename) -> tuple[str, dict[str, Any]]:
        from docx import Document

        doc = Document(io.BytesIO(content))
        return self._process_document(doc)

    def _process_document(self, doc) -> tuple[str, dict[str, Any]]:
        """Collect paragraph and table text from a python-docx Document."""
        text_parts = []
        metadata: dict[str, Any] = {"extractor": "python-docx"}

        props = doc.core_properties
        if props is not None:
            metadata["document_properties"] = {
                "title": props.title,
                "created": str(props.created) if props.created else None,
                "modified": str(props.modified) if props.modified else None,
            }

        for paragraph in doc.paragraphs:
            text = paragraph.text.strip()
            if text:
                text_parts.append(text)

        table_rows = 0
        for table in doc.tables:
            for row in table.rows:
                row_text = []
                for cell in row.cells:
                    cell_text = cell.text.strip()
                    # Merged cells repeat the same text
                    if cell_text and cell_text not in row_text:
                        row_text.append(cell_text)
                if row_text:
                    text_parts.append(" | ".join(row_text))
                    table_rows += 1

        metadata["paragraph_count"] = len(doc.paragraphs)
        metadata["table_rows"] = table_rows
        metadata["section_count"] = len(doc.sections)

        full_text = "\n".join(text_parts)
        if not full_text.strip():
            logger.debug("Word document appears to be empty or contains only images")

        return full_text, metadata
