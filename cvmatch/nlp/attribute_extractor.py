"""
Candidate attribute extraction.

Mines structured candidate fields out of cleaned CV text:
1. Email
2. Phone (header region preferred)
3. Name from the first line
4. Current title and employer
5. Skill category flags
6. Dated experience entries
7. Notes from the opening lines
8. Confidence, capped for short texts
"""

import re
from typing import Any, Callable, Optional, TypeVar

from cvmatch.data.models import CandidateAttributes, ExperienceEntry, SkillFlags
from cvmatch.utils.config import ParsingSettings, get_settings
from cvmatch.utils.constants import (
    ATTRIBUTE_BASE_LENGTH,
    ATTRIBUTE_BONUSES,
    LOW_YIELD_CONFIDENCE_CAP,
    LOW_YIELD_NOTE,
)
from cvmatch.utils.logger import get_logger

from .parsers import ContactInfo, ContactParser, ExperienceParser, SkillsParser
from .preprocessor import split_lines

logger = get_logger(__name__)

T = TypeVar("T")

NOTE_MIN_LINE_LENGTH = 20
_YEAR = re.compile(r"\d{4}")


class AttributeExtractor:
    """
    Derives CandidateAttributes from extracted text.

    Never raises on malformed input: each field falls back to its empty
    value independently of the others.
    """

    def __init__(self, settings: Optional[ParsingSettings] = None):
        self.settings = settings or get_settings().parsing
        self.contact_parser = ContactParser(header_region_chars=self.settings.header_region_chars)
        self.experience_parser = ExperienceParser(header_region_lines=self.settings.header_region_lines)
        self.skills_parser = SkillsParser()

    def extract(self, text: Any) -> CandidateAttributes:
        """
        Extract candidate attributes.

        Args:
            text: Cleaned text from the extraction pipeline

        Returns:
            A new CandidateAttributes record
        """
        if not isinstance(text, str):
            text = ""
        lines = split_lines(text)

        contact = self._run("contact", lambda: self.contact_parser.parse(text), ContactInfo())
        title, employer = self._run(
            "current role", lambda: self.experience_parser.find_current_role(lines), ("", "")
        )
        skills = self._run("skills", lambda: self.skills_parser.detect(text), SkillFlags())
        experience = self._run(
            "experience", lambda: self.experience_parser.extract_entries(lines), []
        )
        notes = self._run("notes", lambda: self.build_notes(lines), "")

        confidence = self.calculate_confidence(text, contact, experience, skills)
        if len(text) < self.settings.minimum_text_yield:
            confidence = min(confidence, LOW_YIELD_CONFIDENCE_CAP)
            notes = f"{notes} {LOW_YIELD_NOTE}".strip()
            logger.info(
                f"Low text yield ({len(text)} chars); confidence capped at {LOW_YIELD_CONFIDENCE_CAP}"
            )

        attributes = CandidateAttributes(
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
            current_title=title,
            current_employer=employer,
            skills=skills,
            experience=tuple(experience),
            notes=notes,
            confidence=confidence,
        )

        logger.debug(
            f"Extracted attributes: name={'yes' if contact.has_full_name else 'no'}, "
            f"title={'yes' if title else 'no'}, employer={'yes' if employer else 'no'}, "
            f"experience={len(experience)} entries, skills={skills.count}, "
            f"confidence={confidence:.2f}"
        )
        return attributes

    def calculate_confidence(
        self,
        text: str,
        contact: ContactInfo,
        experience: list[ExperienceEntry],
        skills: SkillFlags,
    ) -> float:
        """Length-based base plus fixed bonuses per populated field, capped at 1.0."""
        confidence = min(1.0, len(text) / ATTRIBUTE_BASE_LENGTH)
        if contact.has_full_name:
            confidence += ATTRIBUTE_BONUSES["name"]
        if contact.email:
            confidence += ATTRIBUTE_BONUSES["email"]
        if contact.phone:
            confidence += ATTRIBUTE_BONUSES["phone"]
        if experience:
            confidence += ATTRIBUTE_BONUSES["experience"]
        confidence += skills.count * ATTRIBUTE_BONUSES["skill"]
        return min(confidence, 1.0)

    def build_notes(self, lines: list[str]) -> str:
        """
        Summary from the opening content lines.

        Lines carrying contact details or dates are left out.
        """
        content_lines = [
            line for line in lines[: self.settings.notes_source_lines]
            if len(line) > NOTE_MIN_LINE_LENGTH
            and "@" not in line
            and not _YEAR.search(line)
            and "phone" not in line.lower()
            and "email" not in line.lower()
        ]
        notes = " ".join(content_lines)
        if len(notes) > self.settings.notes_max_chars:
            return notes[: self.settings.notes_max_chars] + "..."
        return notes

    def _run(self, step: str, func: Callable[[], T], default: T) -> T:
        try:
            return func()
        except Exception as e:
            logger.warning(f"Attribute extraction step '{step}' failed, using default: {e}")
            return default


# Global extractor instance
_attribute_extractor: Optional[AttributeExtractor] = None


def get_attribute_extractor() -> AttributeExtractor:
    """Get or create the global attribute extractor."""
    global _attribute_extractor
    if _attribute_extractor is None:
        _attribute_extractor = AttributeExtractor()
    return _attribute_extractor
