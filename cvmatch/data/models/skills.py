"""
Skill set models.

The category set is closed: communications, campaigns, policy and public
affairs. Candidates carry boolean flags; the structured taxonomy uses 0-5
ratings for the same categories.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from pydantic import Field

from cvmatch.utils.constants import SkillCategory

from .base import RecordModel


class SkillFlags(RecordModel):
    """Boolean skill flags, one per category."""

    communications: bool = False
    campaigns: bool = False
    policy: bool = False
    public_affairs: bool = Field(default=False, alias="publicAffairs")

    @classmethod
    def from_categories(cls, categories) -> "SkillFlags":
        return cls(**{_FIELD_BY_CATEGORY[c]: True for c in categories})

    def get(self, category: SkillCategory) -> bool:
        return getattr(self, _FIELD_BY_CATEGORY[category])

    @property
    def active(self) -> set[SkillCategory]:
        """Categories flagged true."""
        return {c for c in SkillCategory if self.get(c)}

    @property
    def count(self) -> int:
        return len(self.active)


class SkillRatings(RecordModel):
    """Integer 0-5 ratings, one per category."""

    communications: int = Field(default=0, ge=0, le=5)
    campaigns: int = Field(default=0, ge=0, le=5)
    policy: int = Field(default=0, ge=0, le=5)
    public_affairs: int = Field(default=0, ge=0, le=5, alias="publicAffairs")

    def get(self, category: SkillCategory) -> int:
        return getattr(self, _FIELD_BY_CATEGORY[category])

    @property
    def active(self) -> set[SkillCategory]:
        """Categories rated above zero."""
        return {c for c in SkillCategory if self.get(c) > 0}

    def to_flags(self) -> SkillFlags:
        return SkillFlags.from_categories(self.active)


_FIELD_BY_CATEGORY: dict[SkillCategory, str] = {
    SkillCategory.COMMUNICATIONS: "communications",
    SkillCategory.CAMPAIGNS: "campaigns",
    SkillCategory.POLICY: "policy",
    SkillCategory.PUBLIC_AFFAIRS: "public_affairs",
}


SkillInput = Union[SkillFlags, SkillRatings, Mapping[str, Any], None]


def active_categories(skills: SkillInput) -> Optional[set[SkillCategory]]:
    """
    Categories held (candidate) or required (job) by a skill input.

    Accepts SkillFlags, SkillRatings or a plain mapping keyed by category
    name. Mapping values count when they are True or a positive rating;
    unknown keys are ignored. Returns None when there is no skill data.
    """
    if skills is None:
        return None
    if isinstance(skills, (SkillFlags, SkillRatings)):
        return skills.active
    if not isinstance(skills, Mapping):
        return None

    active = set()
    for key, value in skills.items():
        category = SkillCategory.from_key(str(key))
        if category is None:
            continue
        if value is True or (
            isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
        ):
            active.add(category)
    return active
