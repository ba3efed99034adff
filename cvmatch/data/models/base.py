"""
Base model classes for cvmatch data models.

Records produced by the extraction and scoring code are immutable: a new
extraction always produces a new record.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class RecordModel(BaseModel):
    """
    Base model for immutable records handed to persistence collaborators.

    Fields accept both their Python names and their camelCase aliases.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_record(self) -> dict[str, Any]:
        """Serialize to a flat, JSON-compatible dictionary using wire aliases."""
        return self.model_dump(mode="json", by_alias=True)
