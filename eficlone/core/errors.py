"""Exception hierarchy for eficlone."""

from typing import Any


class EfiCloneError(Exception):
    """Base exception for all eficlone errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class InvocationError(EfiCloneError):
    """The run was not started because of how it was invoked."""


class UnsupportedInvocationError(InvocationError):
    """Parameter shape not recognized for any known caller."""


class PreflightSkipError(InvocationError):
    """Caller reported a condition under which the run must not act."""


class ResolutionError(EfiCloneError):
    """A disk or firmware partition could not be determined unambiguously."""


class MountError(EfiCloneError):
    """A firmware partition could not be mounted."""


class UnmountError(EfiCloneError):
    """A firmware partition could not be unmounted."""


class VerificationError(EfiCloneError):
    """Source and destination content differ after the copy."""


class CommandError(EfiCloneError):
    """An external command failed, timed out or produced unreadable output."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(
            message,
            {"command": command or [], "returncode": returncode, "stderr": stderr},
        )
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class ConfigError(EfiCloneError):
    """Configuration could not be loaded or is invalid."""


class LockError(EfiCloneError):
    """Another run holds the run lock."""


__all__ = [
    "CommandError",
    "ConfigError",
    "EfiCloneError",
    "InvocationError",
    "LockError",
    "MountError",
    "PreflightSkipError",
    "ResolutionError",
    "UnmountError",
    "UnsupportedInvocationError",
    "VerificationError",
]
