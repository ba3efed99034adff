"""
Match scoring functions.

Pure functions combining directional skill overlap (weighted 0.7) and
salary-range proximity (weighted 0.3) into a total score in [0, 1].
None of them raise on missing or malformed data; they score zero instead.
"""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from cvmatch.core.salary_banding import coerce_amount, default_max
from cvmatch.data.models import CandidateProfile, JobRequisition, MatchScore, SkillInput, active_categories
from cvmatch.utils.constants import SALARY_WEIGHT, SKILL_WEIGHT
from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)


def skill_overlap_score(candidate_skills: SkillInput, job_skills: SkillInput) -> float:
    """
    Fraction of the job's required categories the candidate also holds.

    Extra candidate skills neither help nor hurt. Zero when either side is
    missing or the job requires nothing.
    """
    held = active_categories(candidate_skills)
    required = active_categories(job_skills)
    if held is None or not required:
        return 0.0
    return len(held & required) / len(required)


def salary_proximity_score(
    candidate_min: Any,
    candidate_max: Any,
    job_min: Any,
    job_max: Any,
) -> float:
    """
    Overlap of the two salary ranges relative to their combined span, times 0.3.

    A missing maximum is derived from its minimum with ``default_max``.
    Zero when either minimum is missing or the ranges do not overlap.
    """
    candidate_range = _salary_range(candidate_min, candidate_max)
    job_range = _salary_range(job_min, job_max)
    if candidate_range is None or job_range is None:
        return 0.0

    candidate_low, candidate_high = candidate_range
    job_low, job_high = job_range

    overlap = min(candidate_high, job_high) - max(candidate_low, job_low)
    if overlap <= 0:
        return 0.0

    total_span = max(candidate_high, job_high) - min(candidate_low, job_low)
    return (overlap / total_span) * SALARY_WEIGHT


def _salary_range(salary_min: Any, salary_max: Any) -> Optional[tuple[float, float]]:
    low = coerce_amount(salary_min)
    if low is None:
        return None
    high = coerce_amount(salary_max)
    if high is None:
        high = default_max(low)
    return (low, high) if low <= high else (high, low)


def match_score(candidate: Any, job: Any) -> MatchScore:
    """
    Score a candidate against a job requisition.

    Accepts models or plain mappings; a missing side scores zero.
    """
    candidate = as_model(candidate, CandidateProfile)
    job = as_model(job, JobRequisition)
    if candidate is None or job is None:
        return MatchScore.zero()

    skill_score = skill_overlap_score(candidate.skills, job.required_skills) * SKILL_WEIGHT
    salary_score = salary_proximity_score(
        candidate.salary.min, candidate.salary.max, job.salary.min, job.salary.max
    )
    return MatchScore.from_parts(skill_score, salary_score)


def as_model(value: Any, model: type) -> Any:
    """Coerce a mapping to ``model``; malformed or non-mapping input is None."""
    if value is None or isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        return None
    try:
        return model.model_validate(value)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed {model.__name__}: {e.error_count()} validation error(s)")
        return None
