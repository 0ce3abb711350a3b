"""Base model for all eficlone Pydantic models.

This module provides a base model class that enforces consistent serialization
behavior across all eficlone models.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class EfiCloneBaseModel(BaseModel):
    """Base model class for all eficlone Pydantic models.

    Serialization helpers always use aliases and JSON-compatible values so a
    result can be written straight into the run log.
    """

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=False,
        validate_assignment=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary with consistent serialization parameters.

        Returns:
            Dictionary representation using JSON-compatible serialization
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
