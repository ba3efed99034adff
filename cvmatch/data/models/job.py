"""
Job requisition data model.
"""

from typing import Optional

from pydantic import Field

from .base import RecordModel
from .salary import SalaryRange
from .skills import SkillFlags, SkillRatings


class JobRequisition(RecordModel):
    """A job posting against which candidates are scored."""

    id: Optional[str] = None
    title: str = ""
    required_skills: Optional[SkillFlags | SkillRatings] = Field(default=None, alias="requiredSkills")
    salary: SalaryRange = Field(default_factory=SalaryRange)
