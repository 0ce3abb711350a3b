"""Base result model for operations that report messages and errors."""

from datetime import datetime

from pydantic import Field, model_validator

from eficlone.core.structlog_logger import get_struct_logger
from eficlone.models.base import EfiCloneBaseModel


logger = get_struct_logger(__name__)


class BaseResult(EfiCloneBaseModel):
    """Base class for all operation results."""

    success: bool
    timestamp: datetime = Field(default_factory=datetime.now)
    messages: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_success_consistency(self) -> "BaseResult":
        """Ensure success flag is consistent with errors."""
        if self.errors and self.success:
            logger.warning("result_success_mismatch", error_count=len(self.errors))
            # Bypass validate_assignment to avoid re-entering this validator
            object.__setattr__(self, "success", False)
        return self

    def add_message(self, message: str) -> None:
        """Add an informational message."""
        self.messages.append(message)
        logger.info("result_message_added", message=message)

    def add_warning(self, warning: str) -> None:
        """Add a warning. Warnings never change the success flag."""
        self.warnings.append(warning)
        logger.warning("result_warning_added", warning=warning)

    def add_error(self, error: str) -> None:
        """Add an error message and mark the result failed."""
        self.errors.append(error)
        logger.error("result_error_added", error=error)
        self.success = False


__all__ = ["BaseResult"]
