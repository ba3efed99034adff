"""
Text preprocessing utilities for CV parsing.

Every extraction adapter runs its raw output through ``clean_text`` so that
confidence scores stay comparable across adapters.
"""

import re
from typing import Any

from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)


# C0 and C1 control characters; newline and tab are kept
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")
_LINE_BREAKS = re.compile(r"\r\n?")
_INLINE_WHITESPACE = re.compile(r"[^\S\n]+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


class TextCleaner:
    """
    Normalizes raw extracted text.

    Total and idempotent: ``clean(clean(x)) == clean(x)`` and any non-string
    input yields an empty string.
    """

    def clean(self, raw_text: Any) -> str:
        """
        Clean raw text.

        Args:
            raw_text: Text as produced by an extraction library

        Returns:
            Text with control characters removed, line breaks normalized to
            LF, runs of spaces and tabs collapsed, at most one blank line
            between paragraphs, and no leading or trailing whitespace
        """
        if not isinstance(raw_text, str) or not raw_text:
            return ""

        text = _LINE_BREAKS.sub("\n", raw_text)
        text = _CONTROL_CHARS.sub("", text)
        text = _INLINE_WHITESPACE.sub(" ", text)
        text = "\n".join(line.strip() for line in text.split("\n"))
        text = _EXCESS_NEWLINES.sub("\n\n", text)
        return text.strip()

    def __call__(self, raw_text: Any) -> str:
        return self.clean(raw_text)


_cleaner = TextCleaner()


def clean_text(raw_text: Any) -> str:
    """Module-level shortcut for ``TextCleaner().clean``."""
    return _cleaner.clean(raw_text)


def split_lines(text: str) -> list[str]:
    """Return the non-empty, stripped lines of a text."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]
