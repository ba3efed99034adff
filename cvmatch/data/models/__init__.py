"""
Data models for cvmatch.

Pydantic records exchanged with persistence and UI collaborators.
"""

from .base import RecordModel
from .candidate import CandidateAttributes, CandidateProfile, ExperienceEntry
from .job import JobRequisition
from .match import MatchScore
from .salary import SalaryRange
from .skills import SkillFlags, SkillInput, SkillRatings, active_categories

__all__ = [
    "RecordModel",
    "CandidateAttributes",
    "CandidateProfile",
    "ExperienceEntry",
    "JobRequisition",
    "MatchScore",
    "SalaryRange",
    "SkillFlags",
    "SkillInput",
    "SkillRatings",
    "active_categories",
]
