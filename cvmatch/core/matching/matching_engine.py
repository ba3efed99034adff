"""
Candidate-job match scorer.

Wraps the pure scoring functions with human-readable reasons, a score
level and ranking. Scores are recomputed on every call; nothing is cached
because candidate and job data can change between calls.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from cvmatch.core.salary_banding import band_label, coerce_amount, default_max
from cvmatch.data.models import CandidateProfile, JobRequisition, MatchScore, active_categories
from cvmatch.utils.constants import SCORE_PRECISION, MatchScoreLevel, SkillCategory
from cvmatch.utils.logger import audit_log, get_logger

from .scoring import as_model, match_score, salary_proximity_score, skill_overlap_score

logger = get_logger(__name__)

NO_REQUIRED_SKILLS_REASON = "No required skills specified for this role"


@dataclass
class MatchResult:
    """Score of one candidate against one job, with its explanation."""

    score: MatchScore = field(default_factory=MatchScore.zero)
    reasons: list[str] = field(default_factory=list)
    level: MatchScoreLevel = MatchScoreLevel.WEAK
    matched_skills: list[SkillCategory] = field(default_factory=list)
    missing_skills: list[SkillCategory] = field(default_factory=list)
    salary_overlap: bool = False

    @property
    def total_score(self) -> float:
        return self.score.total_score

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.score.to_record(),
            "level": self.level.value,
            "reasons": list(self.reasons),
        }


@dataclass
class RankedCandidate:
    """A candidate with its position in a ranking."""

    rank: int
    candidate: CandidateProfile
    result: MatchResult

    @property
    def total_score(self) -> float:
        return self.result.total_score


class MatchScorer:
    """
    Scores candidates against job requisitions.

    Skill overlap contributes up to 0.7 and salary proximity up to 0.3.
    """

    def score(self, candidate: Any, job: Any) -> MatchScore:
        """Weighted score only."""
        return match_score(candidate, job)

    def skill_overlap(self, candidate_skills: Any, job_skills: Any) -> float:
        return skill_overlap_score(candidate_skills, job_skills)

    def salary_proximity(self, candidate_min, candidate_max, job_min, job_max) -> float:
        return salary_proximity_score(candidate_min, candidate_max, job_min, job_max)

    def evaluate(self, candidate: Any, job: Any) -> MatchResult:
        """
        Score a candidate against a job and explain the result.

        Args:
            candidate: CandidateProfile or mapping
            job: JobRequisition or mapping

        Returns:
            MatchResult with score, reasons and level
        """
        candidate = as_model(candidate, CandidateProfile)
        job = as_model(job, JobRequisition)
        if candidate is None or job is None:
            return MatchResult(reasons=["Candidate or job data is missing"])

        score = match_score(candidate, job)
        held = active_categories(candidate.skills) or set()
        required = active_categories(job.required_skills) or set()

        result = MatchResult(
            score=score,
            reasons=self.explain(candidate, job),
            level=MatchScoreLevel.from_score(score.total_score),
            matched_skills=_ordered(held & required),
            missing_skills=_ordered(required - held),
            salary_overlap=score.salary_score > 0,
        )

        audit_log(
            "candidate_scored",
            {
                "candidate_id": candidate.id,
                "job_id": job.id,
                "total_score": round(score.total_score, SCORE_PRECISION),
                "skill_score": round(score.skill_score, SCORE_PRECISION),
                "salary_score": round(score.salary_score, SCORE_PRECISION),
                "level": result.level.value,
            },
        )
        return result

    def explain(self, candidate: Any, job: Any) -> list[str]:
        """Reasons behind a score, for display next to a ranking."""
        candidate = as_model(candidate, CandidateProfile)
        job = as_model(job, JobRequisition)
        if candidate is None or job is None:
            return ["Candidate or job data is missing"]

        reasons = []
        held = active_categories(candidate.skills) or set()
        required = active_categories(job.required_skills) or set()

        if not required:
            reasons.append(NO_REQUIRED_SKILLS_REASON)
        else:
            matched = _ordered(held & required)
            missing = _ordered(required - held)
            if matched:
                reasons.append(
                    f"Has {len(matched)} of {len(required)} required skills: {_labels(matched)}"
                )
            if missing:
                reasons.append(f"Missing required skills: {_labels(missing)}")

        reasons.append(self._salary_reason(candidate, job))
        return reasons

    def _salary_reason(self, candidate: CandidateProfile, job: JobRequisition) -> str:
        candidate_range = _display_range(candidate.salary.min, candidate.salary.max)
        job_range = _display_range(job.salary.min, job.salary.max)
        if candidate_range is None or job_range is None:
            return "Salary not compared: minimum salary missing"

        band = band_label(candidate.salary.min, currency_symbol="£")
        overlap = salary_proximity_score(
            candidate.salary.min, candidate.salary.max, job.salary.min, job.salary.max
        )
        if overlap > 0:
            return f"Salary ranges overlap: candidate {candidate_range} (band {band}), job {job_range}"
        return f"Salary ranges do not overlap: candidate {candidate_range} (band {band}), job {job_range}"

    def rank(self, candidates: Iterable[Any], job: Any) -> list[RankedCandidate]:
        """
        Score every candidate and sort by total score, highest first.

        Ties keep their input order.
        """
        evaluated = []
        for candidate in candidates:
            profile = as_model(candidate, CandidateProfile)
            if profile is None:
                continue
            evaluated.append((profile, self.evaluate(profile, job)))

        evaluated.sort(key=lambda pair: pair[1].total_score, reverse=True)
        ranked = [
            RankedCandidate(rank=i + 1, candidate=profile, result=result)
            for i, (profile, result) in enumerate(evaluated)
        ]
        logger.info(f"Ranked {len(ranked)} candidates")
        return ranked


def _ordered(categories: set[SkillCategory]) -> list[SkillCategory]:
    return [c for c in SkillCategory if c in categories]


def _labels(categories: list[SkillCategory]) -> str:
    return ", ".join(c.label for c in categories)


def _display_range(salary_min: Any, salary_max: Any) -> Optional[str]:
    low = coerce_amount(salary_min)
    if low is None:
        return None
    high = coerce_amount(salary_max)
    if high is None:
        high = default_max(low)
    return f"£{int(low):,}-£{int(high):,}"


# Singleton instance
_match_scorer: Optional[MatchScorer] = None


def get_match_scorer() -> MatchScorer:
    """Get the match scorer singleton instance."""
    global _match_scorer
    if _match_scorer is None:
        _match_scorer = MatchScorer()
    return _match_scorer
