"""
Candidate data models for cvmatch.

CandidateAttributes is derived purely from extracted text and is never
mutated; CandidateProfile is the stored candidate as read back for scoring.
"""

from typing import Optional

from pydantic import Field

from .base import RecordModel
from .salary import SalaryRange
from .skills import SkillFlags, SkillRatings


class ExperienceEntry(RecordModel):
    """A single role found in the text."""

    employer: str = ""
    title: str = ""
    start_date: str = Field(default="", alias="startDate")
    end_date: str = Field(default="", alias="endDate")

    @property
    def is_current(self) -> bool:
        return not self.end_date or self.end_date.lower() in ("present", "current", "now")


class CandidateAttributes(RecordModel):
    """Structured candidate fields mined from CV text."""

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""
    phone: str = ""
    current_title: str = Field(default="", alias="currentTitle")
    current_employer: str = Field(default="", alias="currentEmployer")
    skills: SkillFlags = Field(default_factory=SkillFlags)
    experience: tuple[ExperienceEntry, ...] = ()
    notes: str = ""
    confidence: float = Field(default=0.0, ge=0, le=1)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class CandidateProfile(RecordModel):
    """A stored candidate as seen by the match scorer."""

    id: Optional[str] = None
    full_name: str = Field(default="", alias="fullName")
    current_title: str = Field(default="", alias="currentTitle")
    skills: Optional[SkillFlags | SkillRatings] = None
    salary: SalaryRange = Field(default_factory=SalaryRange)

    @classmethod
    def from_attributes(
        cls,
        attributes: CandidateAttributes,
        salary: Optional[SalaryRange] = None,
        id: Optional[str] = None,
    ) -> "CandidateProfile":
        return cls(
            id=id,
            full_name=attributes.full_name,
            current_title=attributes.current_title,
            skills=attributes.skills,
            salary=salary or SalaryRange(),
        )
