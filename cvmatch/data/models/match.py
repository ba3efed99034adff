"""
Match score model.
"""

from pydantic import Field, model_validator

from .base import RecordModel


class MatchScore(RecordModel):
    """
    Weighted score of a candidate against a job.

    Computed on demand and never persisted as authoritative state.
    """

    total_score: float = Field(default=0.0, ge=0, alias="totalScore")
    skill_score: float = Field(default=0.0, ge=0, le=0.7, alias="skillScore")
    salary_score: float = Field(default=0.0, ge=0, le=0.3, alias="salaryScore")

    @model_validator(mode="after")
    def check_total(self) -> "MatchScore":
        """Total must be the sum of its parts."""
        if self.total_score != self.skill_score + self.salary_score:
            raise ValueError("total_score must equal skill_score + salary_score")
        return self

    @classmethod
    def from_parts(cls, skill_score: float, salary_score: float) -> "MatchScore":
        return cls(
            skill_score=skill_score,
            salary_score=salary_score,
            total_score=skill_score + salary_score,
        )

    @classmethod
    def zero(cls) -> "MatchScore":
        return cls.from_parts(0.0, 0.0)
