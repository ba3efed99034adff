"""
Salary range model.
"""

from typing import Optional

from pydantic import Field, field_validator

from cvmatch.core import salary_banding

from .base import RecordModel


class SalaryRange(RecordModel):
    """A salary range; once banded, a present minimum always has a maximum."""

    min: Optional[int] = Field(default=None, alias="salaryMin")
    max: Optional[int] = Field(default=None, alias="salaryMax")

    @field_validator("min", "max")
    @classmethod
    def validate_amount(cls, v: Optional[int]) -> Optional[int]:
        """Validate salary amount is non-negative."""
        if v is not None and v < 0:
            raise ValueError("Salary amount must be non-negative")
        return v

    @classmethod
    def banded(cls, salary_min: Optional[int], salary_max: Optional[int] = None) -> "SalaryRange":
        """Build a range with the default maximum applied."""
        salary_min, salary_max = salary_banding.resolve_range(salary_min, salary_max)
        return cls(min=salary_min, max=salary_max)

    @property
    def band_label(self) -> Optional[str]:
        return salary_banding.band_label(self.min)

    def display(self, currency_symbol: str = "£") -> str:
        """Format as e.g. '£80,000-£100,000'."""
        if self.min is None and self.max is None:
            return "not specified"
        if self.max is None:
            return f"{currency_symbol}{self.min:,}+"
        if self.min is None:
            return f"up to {currency_symbol}{self.max:,}"
        return f"{currency_symbol}{self.min:,}-{currency_symbol}{self.max:,}"
