"""Run settings with automatic environment variable support."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from eficlone.models.disk import DEFAULT_FIRMWARE_CONTENT_TYPES


DEFAULT_LOG_FILE = Path("/Users/Shared/EFIClone.log")
DEFAULT_LOCK_FILE = Path("/tmp/eficlone.lock")
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EfiCloneSettings(BaseSettings):
    """Settings handed to the sync engine at construction.

    Precedence order (highest to lowest):
    1. Environment variables (``EFICLONE_*``)
    2. Constructor arguments (config file data, CLI overrides applied later)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="EFICLONE_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override file configuration."""
        return (env_settings, init_settings)

    live: bool = Field(
        default=False,
        description="Perform the synchronization. False runs a simulation that only logs what would change.",
    )

    # Logging
    log_file: Path | None = Field(
        default=DEFAULT_LOG_FILE,
        description="Run log, overwritten at the start of every run",
    )
    log_level: str = "WARNING"
    log_json: bool = False

    notifications: bool = Field(
        default=True, description="Send a desktop notification with the outcome"
    )

    exclude_patterns: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [".*"],
        description="Name patterns left out of both the mirror and the content hash",
    )
    firmware_content_types: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_FIRMWARE_CONTENT_TYPES),
        description="Partition content labels that identify a firmware partition",
    )

    source_read_only: bool = Field(
        default=True, description="Mount the source firmware partition read-only"
    )
    check_boot_partition: bool = Field(
        default=True,
        description="Refuse to write to the firmware partition the machine booted from",
    )

    command_timeout: float = Field(default=30.0, gt=0)
    mount_timeout: float = Field(default=60.0, gt=0)
    modify_window: float = Field(
        default=2.0,
        ge=0,
        description="Seconds two modification times may differ before an unchanged file gets its timestamps refreshed (FAT stores 2s resolution)",
    )

    require_root: bool = True
    lock_file: Path = DEFAULT_LOCK_FILE

    @field_validator("exclude_patterns", "firmware_content_types", mode="before")
    @classmethod
    def decode_comma_list(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        if isinstance(v, list | tuple):
            return [str(item).strip() for item in v if str(item).strip()]
        raise ValueError("Expected a list or a comma separated string")

    @field_validator("firmware_content_types")
    @classmethod
    def validate_content_types_not_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("At least one firmware content type must be configured")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        upper_v = v.strip().upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LOG_LEVELS}")
        return upper_v

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Path | None:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Path(v).expanduser()


__all__ = ["DEFAULT_LOCK_FILE", "DEFAULT_LOG_FILE", "EfiCloneSettings"]
