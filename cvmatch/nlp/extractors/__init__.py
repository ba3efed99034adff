"""
Extraction adapters for various document formats.

Supports text extraction from PDF (text layer or OCR), DOCX, TXT, Markdown
and RTF, with a best-effort fallback for anything else.
"""

from .base import ExtractionAdapter, ExtractionResult, text_confidence
from .pdf_extractor import StructuredDocumentAdapter
from .docx_extractor import WordProcessorAdapter
from .ocr_extractor import OpticalCharacterAdapter
from .text_extractor import PlainTextAdapter, decode_bytes
from .fallback_extractor import UniversalFallbackAdapter
from .pipeline import (
    ExtractionOutcome,
    ExtractionPipeline,
    build_default_adapters,
    get_extraction_pipeline,
    select_best,
)

__all__ = [
    "ExtractionAdapter",
    "ExtractionResult",
    "text_confidence",
    "StructuredDocumentAdapter",
    "WordProcessorAdapter",
    "OpticalCharacterAdapter",
    "PlainTextAdapter",
    "decode_bytes",
    "UniversalFallbackAdapter",
    "ExtractionOutcome",
    "ExtractionPipeline",
    "build_default_adapters",
    "get_extraction_pipeline",
    "select_best",
]
