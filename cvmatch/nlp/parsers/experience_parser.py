"""
Work experience parser for CVs.

Finds the current job title and employer, and scans for dated role lines.
All heuristics are best-effort: lines that do not fit a known shape are
skipped rather than guessed at.
"""

import re
from typing import Optional

from cvmatch.data.models import ExperienceEntry
from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)


# Section headings
EXACT_EXPERIENCE_HEADINGS = ("work experience", "professional experience")
EXPERIENCE_KEYWORDS = (
    "work experience", "professional experience", "employment history",
    "career history", "experience", "employment", "work history", "career",
)
HEADING_MAX_LENGTH = 40
HEADING_LOOKAHEAD = 9

ROLE_KEYWORDS = (
    "Manager|Director|Coordinator|Specialist|Analyst|Consultant|Advisor|Officer|"
    "Executive|Lead|Head|Chief|Senior|Junior|Associate|Assistant|Intern|Trainee|"
    "Representative|Agent|Clerk|Developer|Engineer|Designer"
)

# Title shapes tried in order on lines below an experience heading
TITLE_PATTERNS = [
    re.compile(rf"^([A-Z][a-zA-Z\s&/\-]+(?:{ROLE_KEYWORDS}))", re.IGNORECASE),
    re.compile(r"^([A-Z][a-zA-Z\s&/\-]{3,}(?:\s+[A-Z][a-zA-Z\s&/\-]*)*)"),
    re.compile(r"^([A-Z][a-zA-Z\s&/\-]{4,})"),
]

# Section headers and generic nouns that are never a job title
SKIP_PATTERNS = [
    re.compile(
        r"^(Government|Westminster|European|Parliament|London|United|Kingdom|UK|"
        r"England|Scotland|Wales|Northern|Ireland)$",
        re.IGNORECASE,
    ),
    re.compile(r"^(Address|Phone|Email|Contact|Location|Date|Time|Year|Month|Day)$", re.IGNORECASE),
    re.compile(r"^(Summary|Objective|Profile|About|Introduction)$", re.IGNORECASE),
    re.compile(r"^(Education|Qualifications|Skills|Languages|Certifications)$", re.IGNORECASE),
    re.compile(r"^(References|Referees|Contact|Details)$", re.IGNORECASE),
]

# Employer on the same line as the title
EMPLOYER_PATTERNS = [
    re.compile(r"\bat\s+([A-Z][a-zA-Z\s&.,]+)", re.IGNORECASE),
    re.compile(r"@\s+([A-Z][a-zA-Z\s&.,]+)", re.IGNORECASE),
    re.compile(r",\s+([A-Z][a-zA-Z\s&.,]+)", re.IGNORECASE),
]

# Header-region fallback
HEADER_ROLE_KEYWORDS = re.compile(
    r"(Manager|Director|Coordinator|Specialist|Analyst|Consultant|Advisor|Officer|"
    r"Executive|Lead|Head|Chief|Engineer|Developer|Designer|Assistant|Associate)",
    re.IGNORECASE,
)
COMPANY_SUFFIXES = re.compile(
    r"(Limited|Ltd\.?|PLC|LLC|Inc\.?|Incorporated|GmbH|SAS|BV|SA|PTY|Pty\.? Ltd\.?)",
    re.IGNORECASE,
)
COMPANY_WORDS = re.compile(r"\b(Company|Group|Ltd|PLC|Inc|LLC|Holdings)\b", re.IGNORECASE)
COMPANY_LINE_WORDS = re.compile(r"\b(Ltd|Limited|Inc|PLC|LLC)\b", re.IGNORECASE)
EMPLOYER_BLACKLIST = re.compile(r"(Government|Parliament|Westminster|European\s+Parliament)", re.IGNORECASE)

_TITLE_PART = r"[A-Z][A-Za-z &/\-]+"
_EMPLOYER_PART = r"[A-Z][A-Za-z0-9 &.,'\-]+"

# (name, pattern, employer group index)
HEADER_PATTERNS = [
    ("title_at_company", re.compile(rf"^({_TITLE_PART})\s+at\s+({_EMPLOYER_PART})$", re.IGNORECASE), 2),
    ("title_comma_company", re.compile(rf"^({_TITLE_PART}),\s+({_EMPLOYER_PART})$"), 2),
    ("company_dash_title", re.compile(rf"^({_EMPLOYER_PART})\s+[\-–—]\s+({_TITLE_PART})$"), 1),
    ("title_at_symbol_company", re.compile(rf"^({_TITLE_PART})\s+@\s+({_EMPLOYER_PART})$"), 2),
]
STANDALONE_TITLE = re.compile(r"^[A-Z][A-Za-z &/\-]{3,}$")
STANDALONE_COMPANY = re.compile(r"^[A-Z][A-Za-z0-9 &.,'\-]{3,}$")

# Dated role lines: "<Title> — <Employer> (2019 – present)" and
# "<Title> at <Employer>, 2019 - 2021"
_YEARS = r"(\d{4})\s*[–—\-]\s*(\d{4}|present|current)"
EXPERIENCE_ENTRY_PATTERNS = [
    re.compile(rf"^(.+?)\s*(?:—|–|\s-\s)\s*(.+?)\s*\({_YEARS}\)", re.IGNORECASE),
    re.compile(rf"^(.+?)\s+at\s+(.+?),\s*{_YEARS}", re.IGNORECASE),
]


class ExperienceParser:
    """Parser for current role and experience entries."""

    def __init__(self, header_region_lines: int = 15):
        self.header_region_lines = header_region_lines

    def find_current_role(self, lines: list[str]) -> tuple[str, str]:
        """
        Find the most recent job title and employer.

        Looks below an experience heading first, then falls back to the
        header region for same-line "Title at Employer" style patterns.

        Args:
            lines: Non-empty, stripped lines of the CV

        Returns:
            Tuple of (title, employer); either may be empty
        """
        title, employer = "", ""

        heading = self.find_experience_heading(lines)
        if heading is not None:
            title, employer = self._scan_experience_section(lines, heading)

        if not title or not employer:
            header_title, header_employer = self._scan_header_region(lines)
            title = title or header_title
            employer = employer or header_employer

        return title, employer

    def find_experience_heading(self, lines: list[str]) -> Optional[int]:
        """Index of the experience section heading, if any."""
        for i, line in enumerate(lines):
            if line.lower().strip() in EXACT_EXPERIENCE_HEADINGS:
                return i

        for i, line in enumerate(lines):
            lowered = line.lower()
            looks_like_header = (
                not line.startswith("•")
                and len(line) <= HEADING_MAX_LENGTH
                and not re.search(r"[.,;:]", line)
            )
            if looks_like_header and any(k in lowered for k in EXPERIENCE_KEYWORDS):
                return i
        return None

    def _scan_experience_section(self, lines: list[str], heading: int) -> tuple[str, str]:
        end = min(heading + 1 + HEADING_LOOKAHEAD, len(lines))
        for i in range(heading + 1, end):
            line = lines[i]
            if len(line) < 3:
                continue

            title = self._match_title(line)
            if not title:
                continue

            employer = self._match_employer(line)
            if not employer and i + 1 < len(lines):
                next_line = lines[i + 1]
                if 2 < len(next_line) < 100:
                    employer = next_line.strip()
            return title, employer

        return "", ""

    def _match_title(self, line: str) -> str:
        for pattern in TITLE_PATTERNS:
            match = pattern.match(line)
            if not match or len(match.group(1)) <= 3:
                continue
            title = match.group(1).strip()
            if is_skipped_title(title):
                continue
            return title
        return ""

    def _match_employer(self, line: str) -> str:
        for pattern in EMPLOYER_PATTERNS:
            match = pattern.search(line)
            if match and len(match.group(1)) > 2:
                return match.group(1).strip(" ,")
        return ""

    def _scan_header_region(self, lines: list[str]) -> tuple[str, str]:
        window = lines[: self.header_region_lines]
        title, employer = "", ""

        for i, line in enumerate(window):
            if len(line) < 3:
                continue

            matched = False
            for name, pattern, employer_group in HEADER_PATTERNS:
                match = pattern.match(line)
                if not match:
                    continue
                title_group = 1 if employer_group == 2 else 2
                candidate_title = match.group(title_group).strip()
                candidate_employer = match.group(employer_group).strip()
                if is_title_like(candidate_title) and is_employer_like(candidate_employer):
                    logger.debug(f"Header role match ({name})")
                    title = title or candidate_title
                    employer = employer or candidate_employer
                    matched = True
                    break
            if matched:
                break

            if i + 1 < len(window):
                next_line = window[i + 1]
                looks_like_title = bool(STANDALONE_TITLE.match(line)) and not COMPANY_SUFFIXES.search(line)
                looks_like_company = bool(STANDALONE_COMPANY.match(next_line)) and bool(
                    COMPANY_SUFFIXES.search(next_line) or COMPANY_LINE_WORDS.search(next_line)
                )
                if looks_like_title and looks_like_company:
                    title = title or line.strip()
                    employer = employer or next_line.strip()
                    break

        return title, employer

    def extract_entries(self, lines: list[str]) -> list[ExperienceEntry]:
        """
        Dated role lines found anywhere in the text.

        Lines that do not match a known shape produce no entry.
        """
        entries = []
        for line in lines:
            for pattern in EXPERIENCE_ENTRY_PATTERNS:
                match = pattern.match(line)
                if match:
                    title, employer, start, end = match.groups()
                    entries.append(
                        ExperienceEntry(
                            employer=employer.strip(),
                            title=title.strip(),
                            start_date=start,
                            end_date=end,
                        )
                    )
                    break
        return entries


def is_skipped_title(title: str) -> bool:
    """Whether a title-shaped string is really a section header or generic noun."""
    return any(p.match(title) for p in SKIP_PATTERNS)


def is_title_like(value: str) -> bool:
    return bool(HEADER_ROLE_KEYWORDS.search(value)) and not EMPLOYER_BLACKLIST.search(value)


def is_employer_like(value: str) -> bool:
    if EMPLOYER_BLACKLIST.search(value):
        return False
    return bool(
        COMPANY_SUFFIXES.search(value)
        or COMPANY_WORDS.search(value)
        or len(value.split()) >= 2
    )
