"""
Contact information parser for CVs.

Extracts name, email and phone number from extracted text.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)

MIN_PHONE_DIGITS = 9


@dataclass
class ContactInfo:
    """Extracted contact information from a CV."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    raw_matches: dict = field(default_factory=dict)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def has_full_name(self) -> bool:
        return bool(self.first_name and self.last_name)


class ContactParser:
    """Parser for extracting contact information from CV text."""

    EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")

    # Most specific first; the first pattern with a usable match wins
    PHONE_PATTERNS = [
        # India
        re.compile(r"\+91\s?\d{4}\s?\d{5}"),
        # UK international
        re.compile(r"\+44\s?\d{2,4}\s?\d{3,4}\s?\d{3,4}"),
        # North America
        re.compile(r"\+1\s?\d{3}\s?\d{3}\s?\d{4}"),
        # Other international
        re.compile(r"\+\d{1,3}\s?\d{4,5}\s?\d{4,5}"),
        # UK national
        re.compile(r"0\d{2,4}\s?\d{3,4}\s?\d{3,4}"),
        # 3-3-4
        re.compile(r"\d{3}\s?\d{3}\s?\d{4}"),
        # Bracketed area code
        re.compile(r"\(\d{2,4}\)\s?\d{3,4}\s?\d{3,4}"),
        # Bare digit run
        re.compile(r"\d{10,}"),
        # Anything phone-shaped
        re.compile(r"\+?[\d\s\-()]{10,}"),
    ]

    def __init__(self, header_region_chars: int = 500):
        self.header_region_chars = header_region_chars

    def parse(self, text: str) -> ContactInfo:
        """
        Parse contact information from CV text.

        Args:
            text: Cleaned CV text

        Returns:
            ContactInfo; fields that could not be found are empty strings
        """
        result = ContactInfo()
        if not text:
            return result

        result.email = self.extract_email(text)
        if result.email:
            result.raw_matches["email"] = result.email

        result.phone = self.extract_phone(text)
        if result.phone:
            result.raw_matches["phone"] = result.phone

        result.first_name, result.last_name = self.extract_name(text)

        logger.debug(
            f"Contact parsing: name={'yes' if result.first_name else 'no'}, "
            f"email={'yes' if result.email else 'no'}, phone={'yes' if result.phone else 'no'}"
        )
        return result

    def extract_email(self, text: str) -> str:
        """First email-like substring in the text."""
        match = self.EMAIL_PATTERN.search(text)
        return match.group(0) if match else ""

    def extract_phone(self, text: str) -> str:
        """
        Phone number with at least nine digits.

        The header region is searched before the whole document. Within the
        first pattern that matches, the candidate with the most digits wins.
        """
        header = text[: self.header_region_chars]
        phone = self._find_phone(header)
        if phone is None and len(text) > len(header):
            phone = self._find_phone(text)
        return phone or ""

    def _find_phone(self, text: str) -> Optional[str]:
        for pattern in self.PHONE_PATTERNS:
            candidates = [
                m.group(0).strip()
                for m in pattern.finditer(text)
                if _digit_count(m.group(0)) >= MIN_PHONE_DIGITS
            ]
            if candidates:
                # max() keeps the first of equally long numbers
                return max(candidates, key=_digit_count)
        return None

    def extract_name(self, text: str) -> tuple[str, str]:
        """First token of the first non-empty line, then the rest of it."""
        for line in text.split("\n"):
            tokens = line.split()
            if tokens:
                return tokens[0], " ".join(tokens[1:])
        return "", ""


def _digit_count(value: str) -> int:
    return sum(c.isdigit() for c in value)
