"""
Salary banding rules.

A band is a salary rounded down to the nearest 10,000 and is used for coarse
grouping of candidates and jobs. When only a minimum salary is known, the
maximum defaults to a fixed uplift over it.
"""

import math
from numbers import Real
from typing import Any, Optional

from cvmatch.utils.constants import (
    SALARY_BAND_STEP,
    SALARY_MINIMUM_BAND,
    SALARY_UPLIFT_HIGH,
    SALARY_UPLIFT_LOW,
    SALARY_UPLIFT_THRESHOLD,
)


def coerce_amount(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings; anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        amount = float(value)
    elif isinstance(value, str):
        try:
            amount = float(value.replace(",", "").strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(amount) or math.isinf(amount):
        return None
    return amount


def band_value(amount: Any) -> Optional[int]:
    """
    Numeric salary band for an amount.

    Returns None for missing, non-numeric or non-positive amounts.
    """
    value = coerce_amount(amount)
    if value is None or value <= 0:
        return None
    if value < SALARY_MINIMUM_BAND:
        return SALARY_MINIMUM_BAND
    return int(value // SALARY_BAND_STEP) * SALARY_BAND_STEP


def band_label(amount: Any, currency_symbol: str = "") -> Optional[str]:
    """
    Band label for a salary amount, e.g. ``band_label(95000) == "90,000"``.

    Args:
        amount: Salary amount (number or numeric string)
        currency_symbol: Optional prefix such as "£"

    Returns:
        Formatted band label, or None when the amount has no band
    """
    band = band_value(amount)
    if band is None:
        return None
    return f"{currency_symbol}{band:,}"


def default_max(salary_min):
    """
    Default maximum salary for a known minimum.

    ``min + 30,000`` below 100,000, ``min + 50,000`` from 100,000 upwards.

    Raises:
        ValueError: If ``salary_min`` is missing; callers must guard.
    """
    if salary_min is None:
        raise ValueError("default_max requires a minimum salary")
    if salary_min < SALARY_UPLIFT_THRESHOLD:
        return salary_min + SALARY_UPLIFT_LOW
    return salary_min + SALARY_UPLIFT_HIGH


def resolve_range(salary_min, salary_max) -> tuple:
    """
    Apply the defaulting rule to a (min, max) pair.

    A missing maximum is derived from the minimum; a missing minimum leaves
    the pair untouched.
    """
    if salary_min is not None and salary_max is None:
        return salary_min, default_max(salary_min)
    return salary_min, salary_max
