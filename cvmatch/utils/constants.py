"""
Application-wide constants for cvmatch.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "cvmatch"
APP_DISPLAY_NAME: Final[str] = "CV Extraction & Match Scoring"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# File Types
# =============================================================================

MIME_PDF: Final[str] = "application/pdf"
MIME_DOCX: Final[str] = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MIME_DOC: Final[str] = "application/msword"
MIME_TEXT: Final[str] = "text/plain"
MIME_MARKDOWN: Final[str] = "text/markdown"
MIME_RTF: Final[tuple[str, ...]] = ("application/rtf", "text/rtf")

SUPPORTED_RESUME_FORMATS: Final[tuple[str, ...]] = (
    ".pdf",
    ".docx",
    ".doc",
    ".txt",
    ".rtf",
    ".md",
)

MIME_TYPES_BY_EXTENSION: Final[dict[str, str]] = {
    ".pdf": MIME_PDF,
    ".docx": MIME_DOCX,
    ".doc": MIME_DOC,
    ".txt": MIME_TEXT,
    ".md": MIME_MARKDOWN,
    ".rtf": "application/rtf",
}


# =============================================================================
# Skill Categories
# =============================================================================


class SkillCategory(str, Enum):
    """The closed set of skill categories tracked for candidates and jobs."""

    COMMUNICATIONS = "communications"
    CAMPAIGNS = "campaigns"
    POLICY = "policy"
    PUBLIC_AFFAIRS = "publicAffairs"

    @property
    def label(self) -> str:
        """Human readable category name."""
        return SKILL_LABELS[self]

    @classmethod
    def from_key(cls, key: str) -> "SkillCategory | None":
        """Resolve a category from its wire key, field name or label."""
        normalized = key.strip().replace("-", "_").replace(" ", "_").lower()
        for category in cls:
            if normalized in (category.value.lower(), category.name.lower()):
                return category
        return None


SKILL_LABELS: Final[dict[SkillCategory, str]] = {
    SkillCategory.COMMUNICATIONS: "communications",
    SkillCategory.CAMPAIGNS: "campaigns",
    SkillCategory.POLICY: "policy",
    SkillCategory.PUBLIC_AFFAIRS: "public affairs",
}

# Keyword alternations matched against lowercased text, one per category
SKILL_KEYWORDS: Final[dict[SkillCategory, list[str]]] = {
    SkillCategory.COMMUNICATIONS: [
        "communications", "communication", "comms", "media", "press", "pr",
        "public relations", "marketing", "social media", "content",
        "writing", "editorial",
    ],
    SkillCategory.CAMPAIGNS: [
        "campaigns", "campaign", "campaigning", "advocacy", "engagement",
        "grassroots", "activism", "outreach", "community", "community organising",
        "community organizing", "organising", "organizing", "mobilisation",
        "mobilization",
    ],
    SkillCategory.POLICY: [
        "policy", "policies", "briefing", "briefings", "consultation",
        "consultations", "legislative", "legislation", "regulatory",
        "public policy", "government", "research", "analysis",
    ],
    SkillCategory.PUBLIC_AFFAIRS: [
        "public affairs", "government affairs", "parliamentary",
        "stakeholder relations", "lobbying", "government relations",
        "political", "advocacy", "political advocacy",
    ],
}


# =============================================================================
# Salary Banding
# =============================================================================

SALARY_BAND_STEP: Final[int] = 10_000
SALARY_MINIMUM_BAND: Final[int] = 10_000

# Default maximum = minimum + uplift; the uplift widens above the threshold
SALARY_UPLIFT_THRESHOLD: Final[int] = 100_000
SALARY_UPLIFT_LOW: Final[int] = 30_000
SALARY_UPLIFT_HIGH: Final[int] = 50_000


# =============================================================================
# Scoring Constants
# =============================================================================

SKILL_WEIGHT: Final[float] = 0.7
SALARY_WEIGHT: Final[float] = 0.3

# Score thresholds used to colour a match in the CRM
SCORE_THRESHOLDS: Final[dict[str, float]] = {
    "strong": 0.80,
    "moderate": 0.60,
}
SCORE_PRECISION: Final[int] = 4


class MatchScoreLevel(Enum):
    """Categorical levels for match scores."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"

    @classmethod
    def from_score(cls, score: float) -> "MatchScoreLevel":
        """Convert a numeric score to a level."""
        # Compare at display precision; weighted sums land just under thresholds
        score = round(score, SCORE_PRECISION)
        if score >= SCORE_THRESHOLDS["strong"]:
            return cls.STRONG
        elif score >= SCORE_THRESHOLDS["moderate"]:
            return cls.MODERATE
        return cls.WEAK


# =============================================================================
# Attribute Extraction
# =============================================================================

# Extraction confidence by text length: (upper bound exclusive, confidence)
TEXT_CONFIDENCE_STEPS: Final[tuple[tuple[int, float], ...]] = (
    (100, 0.1),
    (500, 0.3),
    (1000, 0.6),
    (2000, 0.8),
)
TEXT_CONFIDENCE_MAX: Final[float] = 0.9

# Attribute confidence
ATTRIBUTE_BASE_LENGTH: Final[int] = 8000
ATTRIBUTE_BONUSES: Final[dict[str, float]] = {
    "name": 0.10,
    "email": 0.10,
    "phone": 0.05,
    "experience": 0.10,
    "skill": 0.05,  # per detected category
}
LOW_YIELD_CONFIDENCE_CAP: Final[float] = 0.3
LOW_YIELD_NOTE: Final[str] = (
    "[Low text yield - extracted text is very short; please review this record manually]"
)
