"""
Tests for the individual extraction adapters.
"""

import codecs
import io
import sys
import types
import zipfile
from pathlib import Path

import pytest

from cvmatch.core.exceptions import AdapterFailure
from cvmatch.nlp.extractors import (
    ExtractionResult,
    OpticalCharacterAdapter,
    PlainTextAdapter,
    StructuredDocumentAdapter,
    UniversalFallbackAdapter,
    WordProcessorAdapter,
    decode_bytes,
    text_confidence,
)
from cvmatch.nlp.extractors.fallback_extractor import OLE_MAGIC, guess_suffix
from cvmatch.utils.config import ExtractionSettings
from cvmatch.utils.constants import MIME_DOCX, MIME_PDF


# ── confidence ───────────────────────────────────────────────────────────────


class TestTextConfidence:
    @pytest.mark.parametrize(
        "length,expected",
        [
            (0, 0.1),
            (99, 0.1),
            (100, 0.3),
            (499, 0.3),
            (500, 0.6),
            (999, 0.6),
            (1000, 0.8),
            (1999, 0.8),
            (2000, 0.9),
            (50000, 0.9),
        ],
    )
    def test_steps(self, length, expected):
        assert text_confidence("a" * length) == expected

    def test_none(self):
        assert text_confidence(None) == 0.1


class TestExtractionResult:
    def test_counts(self):
        result = ExtractionResult(text="Jane Smith\nPolicy", confidence=0.1, adapter_name="plain_text")
        assert result.word_count == 3
        assert result.char_count == 17
        assert not result.is_empty

    def test_is_frozen(self):
        result = ExtractionResult(text="x", confidence=0.1, adapter_name="plain_text")
        with pytest.raises(AttributeError):
            result.text = "y"


# ── applicability ────────────────────────────────────────────────────────────


class TestCanHandle:
    def test_mime_type_match(self):
        assert PlainTextAdapter().can_handle(b"", "text/plain; charset=utf-8")

    def test_extension_match_is_case_insensitive(self):
        assert PlainTextAdapter().can_handle(b"", None, "CV.TXT")

    def test_wrong_extension(self):
        assert not PlainTextAdapter().can_handle(b"", None, "cv.pdf")

    def test_nothing_declared(self, extraction_settings):
        assert not StructuredDocumentAdapter(extraction_settings).can_handle(b"%PDF-1.4")

    def test_docx_by_mime(self):
        assert WordProcessorAdapter().can_handle(b"", MIME_DOCX, "upload")

    def test_fallback_handles_everything(self):
        assert UniversalFallbackAdapter().can_handle(b"", None, None)

    def test_ocr_disabled_by_default(self, extraction_settings):
        adapter = OpticalCharacterAdapter(extraction_settings)
        assert not adapter.can_handle(b"%PDF-1.4", MIME_PDF, "cv.pdf")

    def test_ocr_enabled(self):
        adapter = OpticalCharacterAdapter(ExtractionSettings(enable_optical_recognition=True))
        assert adapter.can_handle(b"%PDF-1.4", MIME_PDF, "cv.pdf")
        assert not adapter.can_handle(b"", "text/plain", "cv.txt")


# ── plain text & RTF ─────────────────────────────────────────────────────────


class TestDecodeBytes:
    def test_utf8(self):
        assert decode_bytes("Zoë Brontë".encode("utf-8")) == ("Zoë Brontë", "utf-8")

    def test_utf8_bom(self):
        text, encoding = decode_bytes(codecs.BOM_UTF8 + b"Jane")
        assert text == "Jane"
        assert encoding == "utf-8-sig"

    def test_utf16_with_bom(self):
        text, encoding = decode_bytes("Jane Smith".encode("utf-16"))
        assert text == "Jane Smith"
        assert encoding == "utf-16"

    def test_windows_1252(self):
        assert decode_bytes("Café – Bar".encode("cp1252")) == ("Café – Bar", "cp1252")

    def test_latin1_last_resort(self):
        # 0x81 is undefined in cp1252
        text, encoding = decode_bytes(b"\x81abc")
        assert encoding == "latin-1"
        assert text.endswith("abc")


class TestPlainTextAdapter:
    def test_extract(self, sample_cv_text):
        result = PlainTextAdapter().extract(sample_cv_text.encode("utf-8"), "text/plain", "cv.txt")
        assert result.adapter_name == "plain_text"
        assert result.text.startswith("Jane Smith")
        assert result.metadata["encoding"] == "utf-8"
        assert result.confidence == text_confidence(result.text)

    def test_rtf_is_converted(self):
        rtf = rb"{\rtf1\ansi{\fonttbl\f0\fswiss Helvetica;}\f0\pard Jane Smith\par Policy Manager\par}"
        result = PlainTextAdapter().extract(rtf, "application/rtf", "cv.rtf")
        assert "Jane Smith" in result.text
        assert "Policy Manager" in result.text
        assert "\\rtf" not in result.text
        assert result.metadata["extractor"] == "striprtf"

    def test_rtf_detected_by_magic(self):
        rtf = rb"{\rtf1\ansi Jane Smith\par}"
        result = PlainTextAdapter().extract(rtf, "text/plain", "cv.txt")
        assert result.metadata["extractor"] == "striprtf"

    def test_blank_file_fails(self):
        with pytest.raises(AdapterFailure) as exc_info:
            PlainTextAdapter().extract(b"  \n\t ", "text/plain", "cv.txt")
        assert exc_info.value.message == "No text extracted"


# ── word processor ───────────────────────────────────────────────────────────


class TestWordProcessorAdapter:
    def test_extract_paragraphs_and_tables(self, sample_docx_bytes):
        result = WordProcessorAdapter().extract(sample_docx_bytes, MIME_DOCX, "cv.docx")
        assert result.text.startswith("Jane Smith")
        assert "Public Affairs Manager at Greenway Trust" in result.text
        assert "Languages | French, Welsh" in result.text
        assert result.metadata["table_rows"] == 1

    def test_not_a_docx(self):
        with pytest.raises(AdapterFailure) as exc_info:
            WordProcessorAdapter().extract(b"plain text, not a zip", MIME_DOCX, "cv.docx")
        assert exc_info.value.adapter_name == "word_processor"


# ── structured document ──────────────────────────────────────────────────────


class TestStructuredDocumentAdapter:
    def test_extract(self, sample_pdf_bytes, extraction_settings):
        adapter = StructuredDocumentAdapter(extraction_settings)
        result = adapter.extract(sample_pdf_bytes, MIME_PDF, "cv.pdf")
        assert "Jane Smith" in result.text
        assert "Greenway Trust" in result.text
        assert result.metadata["page_count"] == 1
        assert result.metadata["insufficient_text"] is False

    def test_short_pdf_flags_insufficient_text(self, make_pdf, extraction_settings):
        adapter = StructuredDocumentAdapter(extraction_settings)
        result = adapter.extract(make_pdf(["Jane Smith", "Policy Manager"]), MIME_PDF, "cv.pdf")
        assert "Jane Smith" in result.text
        assert result.metadata["insufficient_text"] is True

    def test_pdf_without_text_fails(self, make_pdf, extraction_settings):
        with pytest.raises(AdapterFailure):
            StructuredDocumentAdapter(extraction_settings).extract(make_pdf([]), MIME_PDF, "scan.pdf")

    def test_not_a_pdf(self, extraction_settings):
        with pytest.raises(AdapterFailure) as exc_info:
            StructuredDocumentAdapter(extraction_settings).extract(b"hello world", MIME_PDF, "cv.pdf")
        assert "pdfplumber" in exc_info.value.message
        assert "pypdf" in exc_info.value.message

    def test_low_chars_per_page_caps_confidence(self, extraction_settings):
        adapter = StructuredDocumentAdapter(extraction_settings)
        text = "a" * 600
        assert adapter.assess_confidence(text, {"page_count": 1}) == 0.6
        assert adapter.assess_confidence(text, {"page_count": 10}) == 0.3


# ── optical recognition ──────────────────────────────────────────────────────


class TestOpticalCharacterAdapter:
    def test_extract_pages(self, monkeypatch):
        import pdf2image
        import pytesseract

        pages = ["page one", "page two"]
        monkeypatch.setattr(pdf2image, "convert_from_bytes", lambda content, dpi: list(pages))
        monkeypatch.setattr(pytesseract, "image_to_string", lambda image, lang: f"Text of {image}")

        adapter = OpticalCharacterAdapter(ExtractionSettings(enable_optical_recognition=True))
        result = adapter.extract(b"%PDF-1.4", MIME_PDF, "scan.pdf")

        assert result.text == "Text of page one\n\nText of page two"
        assert result.metadata["page_count"] == 2
        assert result.metadata["extractor"] == "tesseract"

    def test_library_error_becomes_adapter_failure(self, monkeypatch):
        import pdf2image

        def _broken(content, dpi):
            raise OSError("poppler not installed")

        monkeypatch.setattr(pdf2image, "convert_from_bytes", _broken)
        adapter = OpticalCharacterAdapter(ExtractionSettings(enable_optical_recognition=True))
        with pytest.raises(AdapterFailure) as exc_info:
            adapter.extract(b"%PDF-1.4", MIME_PDF, "scan.pdf")
        assert "poppler not installed" in exc_info.value.message




# ── universal fallback ───────────────────────────────────────────────────────

LEGACY_DOC = OLE_MAGIC + b"\x00" * 504 + "Jane Smith\rPolicy Manager".encode("utf-16-le")


def _zip(members: dict[str, bytes]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def use_textract(monkeypatch):
    """Install a stand-in textract module whose ``process`` is given by the test."""

    def _install(process):
        monkeypatch.setitem(sys.modules, "textract", types.SimpleNamespace(process=process))

    return _install


class TestUniversalFallbackAdapter:
    @pytest.fixture(autouse=True)
    def without_textract(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "textract", None)

    def test_legacy_doc_uses_textract(self, use_textract):
        seen = {}

        def process(path):
            seen["suffix"] = Path(path).suffix
            seen["content"] = Path(path).read_bytes()
            return "Jane Smith\nPolicy Manager".encode("utf-8")

        use_textract(process)
        result = UniversalFallbackAdapter().extract(LEGACY_DOC, "application/msword", "cv.doc")

        assert result.text == "Jane Smith\nPolicy Manager"
        assert result.metadata["extractor"] == "textract"
        assert seen == {"suffix": ".doc", "content": LEGACY_DOC}

    def test_textract_gets_sniffed_suffix_without_filename(self, use_textract):
        suffixes = []

        def process(path):
            suffixes.append(Path(path).suffix)
            return b"Jane Smith"

        use_textract(process)
        UniversalFallbackAdapter().extract(LEGACY_DOC, None, None)
        assert suffixes == [".doc"]

    def test_legacy_doc_without_textract(self):
        with pytest.raises(AdapterFailure) as exc_info:
            UniversalFallbackAdapter().extract(LEGACY_DOC, "application/msword", "cv.doc")
        assert "textract: not installed" in exc_info.value.message
        assert "requires textract" in exc_info.value.message

    def test_textract_error_falls_back_to_libraries(self, use_textract, sample_docx_bytes):
        def process(path):
            raise RuntimeError("antiword not found")

        use_textract(process)
        result = UniversalFallbackAdapter().extract(sample_docx_bytes, "application/octet-stream", "cv")
        assert "Jane Smith" in result.text
        assert result.metadata["extractor"] == "python-docx"

    def test_mislabelled_docx(self, sample_docx_bytes):
        result = UniversalFallbackAdapter().extract(sample_docx_bytes, "application/octet-stream", "cv")
        assert result.text.startswith("Jane Smith")
        assert "Languages | French, Welsh" in result.text
        assert result.metadata["extractor"] == "python-docx"

    def test_zip_member(self):
        content = _zip({
            "images/logo.png": b"\x89PNG",
            "cv/jane.txt": b"Jane Smith\nPolicy Manager",
        })
        result = UniversalFallbackAdapter().extract(content, None, "cv.zip")
        assert result.text == "Jane Smith\nPolicy Manager"
        assert result.metadata["extractor"] == "zip:cv/jane.txt:plain_text:utf-8"

    def test_zip_prefers_documents_over_text(self, sample_docx_bytes):
        content = _zip({"notes.txt": b"Reference notes", "cv.docx": sample_docx_bytes})
        result = UniversalFallbackAdapter().extract(content, None, "bundle.zip")
        assert result.text.startswith("Jane Smith")
        assert result.metadata["extractor"] == "zip:cv.docx:python-docx"

    def test_zip_without_readable_member(self):
        with pytest.raises(AdapterFailure) as exc_info:
            UniversalFallbackAdapter().extract(_zip({"logo.png": b"\x89PNG"}), None, "cv.zip")
        assert "No readable document in archive" in exc_info.value.message

    def test_pdf_through_pypdf(self, make_pdf):
        content = make_pdf(["Jane Smith", "Policy (Senior) Manager"])
        result = UniversalFallbackAdapter().extract(content, None, None)
        assert "Jane Smith" in result.text
        assert "Policy (Senior) Manager" in result.text
        assert result.metadata["extractor"] == "pypdf"

    def test_rtf(self):
        result = UniversalFallbackAdapter().extract(rb"{\rtf1\ansi Jane Smith\par}", None, None)
        assert result.text == "Jane Smith"
        assert result.metadata["extractor"] == "striprtf"

    def test_unknown_bytes_decoded_as_text(self):
        result = UniversalFallbackAdapter().extract(b"\x00\x01Jane Smith\x02 Policy", None, None)
        assert result.text == "Jane Smith Policy"
        assert result.metadata["extractor"] == "plain_text:utf-8"

    def test_empty_file(self):
        with pytest.raises(AdapterFailure) as exc_info:
            UniversalFallbackAdapter().extract(b"", None, None)
        assert exc_info.value.message == "File is empty"

    def test_no_readable_text(self):
        with pytest.raises(AdapterFailure) as exc_info:
            UniversalFallbackAdapter().extract(b"\x00\x01\x02\x03", None, None)
        assert exc_info.value.message == "No text extracted"


class TestGuessSuffix:
    @pytest.mark.parametrize(
        "content,filename,expected",
        [
            (b"anything", "CV.DOC", ".doc"),
            (b"%PDF-1.4", None, ".pdf"),
            (LEGACY_DOC, None, ".doc"),
            (rb"{\rtf1 x}", None, ".rtf"),
            (b"Jane Smith", "upload", ".txt"),
        ],
    )
    def test_guess(self, content, filename, expected):
        assert guess_suffix(content, filename) == expected

    def test_zip_is_docx(self):
        assert guess_suffix(_zip({"a.txt": b"x"}), None) == ".docx"
