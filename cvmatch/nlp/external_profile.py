"""
Normalisation of external document-parser responses.

The hosted parser returns JSON in either camelCase or PascalCase, optionally
wrapped in a ``data`` envelope. This module flattens it into the fields the
CRM stores and picks the candidate's current role.
"""

import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any, Optional

from cvmatch.utils.logger import get_logger

logger = get_logger(__name__)

# Open-ended roles rank above any dated role
OPEN_ROLE_BONUS = 3
DATE_SCALE = 1e12

_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y", "%m/%Y", "%d/%m/%Y", "%b %Y", "%B %Y")
_FALLBACK_PHONE = re.compile(r"(?:\+?\d[\s().\-]?){9,15}")


def _pick(obj: Any, *keys: str) -> Any:
    """First non-null value among the given keys."""
    if not isinstance(obj, Mapping):
        return None
    for key in keys:
        if obj.get(key) is not None:
            return obj[key]
    return None


def _timestamp_ms(value: Any) -> float:
    """
    Best-effort epoch milliseconds for a date value.

    Unparseable or missing values coerce to 0, so malformed dates can order
    arbitrarily among themselves.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str) or not value.strip():
        return 0.0

    text = value.strip()
    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return 0.0
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp() * 1000


def _recency(role: Any) -> float:
    end = _pick(role, "endDate", "EndDate")
    start = _pick(role, "startDate", "StartDate")
    score = OPEN_ROLE_BONUS if end is None else 0
    return score + _timestamp_ms(end) / DATE_SCALE + _timestamp_ms(start) / DATE_SCALE


def pick_most_recent_role(entries: Any) -> dict[str, Any]:
    """
    The candidate's current role from a work-experience list.

    Roles with no end date rank first, then later end and start dates. The
    first role in that order with both a title and a company wins, otherwise
    the first role. Returns an empty dict for an empty or missing list.
    """
    if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)) or not entries:
        return {}

    ranked = sorted(entries, key=_recency, reverse=True)
    for role in ranked:
        if _pick(role, "company", "Company") and _pick(role, "jobTitle", "JobTitle"):
            return dict(role)
    first = ranked[0]
    return dict(first) if isinstance(first, Mapping) else {}


def fallback_phone(raw_text: Optional[str]) -> str:
    """Digits (and a leading +) of the first phone-shaped run in raw text."""
    if not raw_text:
        return ""
    match = _FALLBACK_PHONE.search(raw_text)
    if not match:
        return ""
    return re.sub(r"[^\d+]", "", match.group(0))


def normalise_external_profile(raw: Any, raw_text: Optional[str] = None) -> dict[str, str]:
    """
    Flatten an external parser response.

    Args:
        raw: Parsed JSON body of the response
        raw_text: Document text, used only when the response has no phone

    Returns:
        Dict with first_name, last_name, full_name, email, phone,
        current_title and current_employer (empty strings when absent)
    """
    data = _pick(raw, "data", "Data")
    if data is None:
        # Some deployments return the payload without an envelope
        data = raw if isinstance(raw, Mapping) else {}
    personal = _pick(data, "personalInfo", "PersonalInfo") or {}
    experience = _pick(data, "workExperience", "WorkExperience") or []
    role = pick_most_recent_role(experience)

    first_name = _pick(personal, "firstName", "FirstName") or ""
    last_name = _pick(personal, "lastName", "LastName") or ""
    full_name = _pick(personal, "name", "Name") or f"{first_name} {last_name}".strip()
    phone = _pick(personal, "phone", "Phone") or fallback_phone(raw_text)

    profile = {
        "first_name": str(first_name),
        "last_name": str(last_name),
        "full_name": str(full_name),
        "email": str(_pick(personal, "email", "Email") or ""),
        "phone": str(phone),
        "current_title": str(_pick(role, "jobTitle", "JobTitle") or ""),
        "current_employer": str(_pick(role, "company", "Company") or ""),
    }
    logger.debug(
        f"Normalised external profile with {len(experience) if isinstance(experience, list) else 0} "
        f"role(s); current role {'found' if profile['current_title'] else 'missing'}"
    )
    return profile
