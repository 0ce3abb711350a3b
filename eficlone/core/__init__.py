"""Core infrastructure: errors, logging, external commands and run locking."""

from eficlone.core.commands import run_command
from eficlone.core.errors import (
    CommandError,
    ConfigError,
    EfiCloneError,
    InvocationError,
    LockError,
    MountError,
    PreflightSkipError,
    ResolutionError,
    UnmountError,
    UnsupportedInvocationError,
    VerificationError,
)
from eficlone.core.run_lock import RunLock
from eficlone.core.structlog_logger import StructlogMixin, get_struct_logger


__all__ = [
    "CommandError",
    "ConfigError",
    "EfiCloneError",
    "InvocationError",
    "LockError",
    "MountError",
    "PreflightSkipError",
    "ResolutionError",
    "RunLock",
    "StructlogMixin",
    "UnmountError",
    "UnsupportedInvocationError",
    "VerificationError",
    "get_struct_logger",
    "run_command",
]
