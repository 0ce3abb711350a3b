"""Invocation model produced by the caller classification."""

from enum import Enum

from pydantic import Field

from eficlone.models.base import EfiCloneBaseModel


class CallerKind(str, Enum):
    """Known callers, recognized by how many positional parameters they pass."""

    SHELL = "shell"
    CARBON_COPY_CLONER = "carbon_copy_cloner"
    SUPERDUPER = "superduper"
    UNSUPPORTED = "unsupported"

    @property
    def display_name(self) -> str:
        return {
            CallerKind.SHELL: "Shell",
            CallerKind.CARBON_COPY_CLONER: "Carbon Copy Cloner",
            CallerKind.SUPERDUPER: "SuperDuper!",
            CallerKind.UNSUPPORTED: "unknown caller",
        }[self]


class Invocation(EfiCloneBaseModel):
    """Source and destination volumes extracted from the caller's parameters."""

    caller: CallerKind
    parameters: list[str] = Field(default_factory=list)
    source_volume: str | None = None
    destination_volume: str | None = None
    preflight_ok: bool = True
    skip_reason: str | None = None
    verbose: bool = Field(
        default=False, description="Caller expects detailed progress output"
    )

    @property
    def supported(self) -> bool:
        return self.caller != CallerKind.UNSUPPORTED

    @property
    def runnable(self) -> bool:
        """True when the engine will act rather than report a skip."""
        return self.supported and self.preflight_ok


__all__ = ["CallerKind", "Invocation"]
