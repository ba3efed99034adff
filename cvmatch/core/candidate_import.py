"""
Candidate import from an uploaded CV.

Pipeline:
1. Validate the upload
2. Extract text (best of several adapters)
3. Derive candidate attributes
4. Band the salary and default its maximum
5. Audit the import
"""

from dataclasses import dataclass
from typing import Any, Optional

from cvmatch.core.validation import UploadValidator
from cvmatch.data.models import CandidateAttributes, CandidateProfile, SalaryRange
from cvmatch.nlp.attribute_extractor import AttributeExtractor
from cvmatch.nlp.extractors import ExtractionOutcome, ExtractionPipeline
from cvmatch.utils.config import AppSettings, get_settings
from cvmatch.utils.logger import audit_log, get_logger

logger = get_logger(__name__)


def apply_banding(salary_min: Optional[int], salary_max: Optional[int] = None) -> SalaryRange:
    """Salary range with the maximum defaulted from the minimum when missing."""
    return SalaryRange.banded(salary_min, salary_max)


@dataclass
class ImportedCandidate:
    """Everything produced by importing one CV."""

    filename: str
    outcome: ExtractionOutcome
    attributes: CandidateAttributes
    salary: SalaryRange
    band_label: Optional[str] = None

    def to_profile(self, id: Optional[str] = None) -> CandidateProfile:
        return CandidateProfile.from_attributes(self.attributes, salary=self.salary, id=id)

    def to_record(self) -> dict[str, Any]:
        """Flat record for a persistence collaborator."""
        record = self.attributes.to_record()
        record.update(
            {
                "salaryMin": self.salary.min,
                "salaryMax": self.salary.max,
                "salaryBand": self.band_label,
                "source": self.outcome.best.adapter_name,
                "extractionConfidence": self.outcome.best.confidence,
                "textLength": self.outcome.best.char_count,
                "metadata": {
                    "originalFileName": self.filename,
                    "attempts": [a.to_dict() for a in self.outcome.attempts],
                    "errors": [str(e) for e in self.outcome.errors],
                },
            }
        )
        return record


class CandidateImporter:
    """Turns uploaded CV bytes into a candidate record."""

    def __init__(
        self,
        settings: Optional[AppSettings] = None,
        pipeline: Optional[ExtractionPipeline] = None,
        extractor: Optional[AttributeExtractor] = None,
        validator: Optional[UploadValidator] = None,
    ):
        self.settings = settings or get_settings()
        self.validator = validator or UploadValidator(self.settings.upload)
        self.pipeline = pipeline or ExtractionPipeline(settings=self.settings.extraction)
        self.extractor = extractor or AttributeExtractor(self.settings.parsing)

    def import_file(
        self,
        content: bytes,
        mime_type: Optional[str],
        filename: str,
        salary_min: Optional[int] = None,
        salary_max: Optional[int] = None,
        timeout_ms: Optional[int] = None,
    ) -> ImportedCandidate:
        """
        Import a candidate from an uploaded file.

        Raises:
            ValidationFailure: If the upload is rejected
            ExtractionFailed: If no text could be extracted
        """
        upload = self.validator.validate(content, filename, mime_type)
        outcome = self.pipeline.run(content, mime_type, filename, timeout_ms=timeout_ms)
        attributes = self.extractor.extract(outcome.text)
        salary = apply_banding(salary_min, salary_max)

        imported = ImportedCandidate(
            filename=upload.filename,
            outcome=outcome,
            attributes=attributes,
            salary=salary,
            band_label=salary.band_label,
        )

        audit_log(
            "candidate_imported",
            {
                "filename": upload.filename,
                "size_bytes": upload.size_bytes,
                "adapter": outcome.best.adapter_name,
                "extraction_confidence": outcome.best.confidence,
                "attribute_confidence": attributes.confidence,
                "email": attributes.email,
                "phone": attributes.phone,
                "full_name": attributes.full_name,
                "salary_band": salary.band_label,
            },
            audit_type="IMPORT",
        )
        logger.info(
            f"Imported {upload.filename} via {outcome.best.adapter_name} "
            f"(attribute confidence {attributes.confidence:.2f})"
        )
        return imported
