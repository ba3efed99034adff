"""
Candidate-job matching.

Pure scoring functions plus the MatchScorer that explains and ranks.
"""

from .matching_engine import (
    MatchResult,
    MatchScorer,
    RankedCandidate,
    get_match_scorer,
)
from .scoring import match_score, salary_proximity_score, skill_overlap_score

__all__ = [
    "MatchResult",
    "MatchScorer",
    "RankedCandidate",
    "get_match_scorer",
    "match_score",
    "salary_proximity_score",
    "skill_overlap_score",
]
