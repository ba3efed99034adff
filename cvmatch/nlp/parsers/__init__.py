"""
CV parsers for extracting structured information.

Each parser is responsible for one kind of information (contact details,
current role and experience, skill categories).
"""

from .contact_parser import ContactInfo, ContactParser
from .experience_parser import ExperienceParser, is_employer_like, is_skipped_title, is_title_like
from .skills_parser import SkillsParser, SkillsParseResult

__all__ = [
    "ContactInfo",
    "ContactParser",
    "ExperienceParser",
    "is_employer_like",
    "is_skipped_title",
    "is_title_like",
    "SkillsParser",
    "SkillsParseResult",
]
