"""
Shared test fixtures for the cvmatch test suite.

Sets environment variables before any cvmatch imports so settings resolve
to the testing profile without writing log files, then provides sample
documents, fake adapters and factory fixtures for records.
"""

import os

# === Set environment BEFORE any cvmatch imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import io
import time
from typing import Any, Optional

import pytest

from cvmatch.core.exceptions import AdapterFailure
from cvmatch.data.models import CandidateProfile, JobRequisition, SalaryRange
from cvmatch.nlp.extractors import ExtractionAdapter
from cvmatch.utils.config import AppSettings, ExtractionSettings, ParsingSettings, UploadSettings


SAMPLE_CV_TEXT = """Jane Smith
jane.smith@example.org | +44 20 7946 0958
London

Experienced public affairs professional with a decade of campaigning and stakeholder relations work across the charity sector.

Work Experience
Public Affairs Manager at Greenway Trust, 2019 - present
Led parliamentary engagement and lobbying strategy for national campaigns.
Policy Manager — Open Futures Ltd (2015 – 2019)
Senior Campaigns Officer at Civic Voice, 2012 - 2015

Education
BA Politics, University of Leeds

Skills
Media relations, press briefings, consultation responses, grassroots organising
"""


# ---------------------------------------------------------------------------
# Settings fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def extraction_settings():
    """Extraction settings with defaults and no timeout."""
    return ExtractionSettings(enable_optical_recognition=False, timeout_ms=None)


@pytest.fixture
def parsing_settings():
    return ParsingSettings()


@pytest.fixture
def upload_settings():
    return UploadSettings()


@pytest.fixture
def app_settings(extraction_settings, parsing_settings, upload_settings):
    return AppSettings(
        extraction=extraction_settings,
        parsing=parsing_settings,
        upload=upload_settings,
    )


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_cv_text():
    return SAMPLE_CV_TEXT


def build_pdf(lines: list[str]) -> bytes:
    """Single-page PDF with one Helvetica text line per entry."""
    stream_lines = ["BT", "/F1 11 Tf", "14 TL", "72 760 Td"]
    for line in lines:
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        stream_lines.append(f"({escaped}) Tj T*")
    stream_lines.append("ET")
    stream = "\n".join(stream_lines).encode("latin-1", errors="replace")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


@pytest.fixture
def make_pdf():
    """Factory building a minimal text-layer PDF from lines."""
    return build_pdf


@pytest.fixture
def sample_pdf_bytes():
    return build_pdf([line for line in SAMPLE_CV_TEXT.splitlines() if line.strip()])


@pytest.fixture
def sample_docx_bytes():
    """DOCX built in memory with python-docx."""
    from docx import Document

    document = Document()
    for line in SAMPLE_CV_TEXT.splitlines():
        if line.strip():
            document.add_paragraph(line)

    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Languages"
    table.rows[0].cells[1].text = "French, Welsh"

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Fake adapters for pipeline scenarios
# ---------------------------------------------------------------------------


class FakeAdapter(ExtractionAdapter):
    """Adapter returning canned text, raising, or sleeping, and counting calls."""

    def __init__(
        self,
        name: str,
        priority: int,
        text: str = "",
        error: Optional[str] = None,
        delay: float = 0.0,
        applicable: bool = True,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.name = name
        self.priority = priority
        self.text = text
        self.error = error
        self.delay = delay
        self.applicable = applicable
        self.metadata = metadata or {}
        self.calls = 0

    def can_handle(self, content, mime_type=None, filename=None) -> bool:
        return self.applicable

    def _extract_text(self, content, mime_type, filename):
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise AdapterFailure(self.name, self.error)
        return self.text, dict(self.metadata)


@pytest.fixture
def make_adapter():
    """Factory for FakeAdapter instances."""

    def _factory(name: str, priority: int, **kwargs) -> FakeAdapter:
        return FakeAdapter(name, priority, **kwargs)

    return _factory


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_candidate():
    """Factory for CandidateProfile records."""

    def _factory(
        skills: Optional[dict[str, Any]] = None,
        salary_min: Optional[int] = 80000,
        salary_max: Optional[int] = 100000,
        id: Optional[str] = None,
        full_name: str = "Jane Smith",
    ) -> CandidateProfile:
        if skills is None:
            skills = {"publicAffairs": True}
        return CandidateProfile(
            id=id,
            full_name=full_name,
            skills=skills,
            salary=SalaryRange(min=salary_min, max=salary_max),
        )

    return _factory


@pytest.fixture
def make_job():
    """Factory for JobRequisition records."""

    def _factory(
        required_skills: Optional[dict[str, Any]] = None,
        salary_min: Optional[int] = 90000,
        salary_max: Optional[int] = 110000,
        title: str = "Head of Public Affairs",
        id: Optional[str] = None,
    ) -> JobRequisition:
        if required_skills is None:
            required_skills = {"publicAffairs": True}
        return JobRequisition(
            id=id,
            title=title,
            required_skills=required_skills,
            salary=SalaryRange(min=salary_min, max=salary_max),
        )

    return _factory
