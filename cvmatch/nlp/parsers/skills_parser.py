"""
Skills parser for CVs.

Flags the four skill categories from keyword matches in the text.
"""

import re
from dataclasses import dataclass, field

from cvmatch.data.models import SkillFlags
from cvmatch.utils.constants import SKILL_KEYWORDS, SkillCategory
from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SkillsParseResult:
    """Result of skills parsing."""

    flags: SkillFlags = field(default_factory=SkillFlags)
    matched_terms: dict[SkillCategory, list[str]] = field(default_factory=dict)

    @property
    def count(self) -> int:
        return self.flags.count


class SkillsParser:
    """Keyword-alternation matcher, one pattern per category."""

    def __init__(self, keywords: dict[SkillCategory, list[str]] | None = None):
        self.keywords = keywords or SKILL_KEYWORDS
        self._patterns = {
            category: _build_pattern(terms)
            for category, terms in self.keywords.items()
        }

    def parse(self, text: str) -> SkillsParseResult:
        """
        Detect skill categories in text.

        Categories are independent; any subset, including none, may match.
        """
        if not text:
            return SkillsParseResult()

        lowered = text.lower()
        matched: dict[SkillCategory, list[str]] = {}
        for category, pattern in self._patterns.items():
            terms = sorted({m.group(0) for m in pattern.finditer(lowered)})
            if terms:
                matched[category] = terms

        flags = SkillFlags.from_categories(matched)
        logger.debug(f"Detected skill categories: {sorted(c.value for c in matched)}")
        return SkillsParseResult(flags=flags, matched_terms=matched)

    def detect(self, text: str) -> SkillFlags:
        """Skill flags for a text."""
        return self.parse(text).flags


def _build_pattern(terms: list[str]) -> re.Pattern:
    # Longest first so multi-word terms win over their prefixes
    ordered = sorted({t.lower() for t in terms}, key=len, reverse=True)
    alternation = "|".join(re.escape(t) for t in ordered)
    return re.compile(rf"\b(?:{alternation})\b")
