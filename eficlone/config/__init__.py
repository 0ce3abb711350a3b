"""Configuration for eficlone runs."""

from eficlone.config.settings import (
    DEFAULT_LOCK_FILE,
    DEFAULT_LOG_FILE,
    EfiCloneSettings,
)
from eficlone.config.user_config import UserConfig, create_user_config


__all__ = [
    "DEFAULT_LOCK_FILE",
    "DEFAULT_LOG_FILE",
    "EfiCloneSettings",
    "UserConfig",
    "create_user_config",
]
