"""Pydantic models shared across eficlone."""

from eficlone.models.base import EfiCloneBaseModel
from eficlone.models.disk import (
    DEFAULT_FIRMWARE_CONTENT_TYPES,
    EFI_PARTITION_TYPE_GUID,
    DiskResolution,
    LookupStatus,
    LookupTier,
    PartitionEntry,
    PartitionLookup,
)
from eficlone.models.invocation import CallerKind, Invocation
from eficlone.models.results import BaseResult
from eficlone.models.sync import (
    EngineState,
    ExitStatus,
    MirrorAction,
    MirrorOperation,
    MirrorReport,
    RunOutcome,
    RunResult,
    TreeHash,
)


__all__ = [
    "DEFAULT_FIRMWARE_CONTENT_TYPES",
    "EFI_PARTITION_TYPE_GUID",
    "BaseResult",
    "CallerKind",
    "DiskResolution",
    "EfiCloneBaseModel",
    "EngineState",
    "ExitStatus",
    "Invocation",
    "LookupStatus",
    "LookupTier",
    "MirrorAction",
    "MirrorOperation",
    "MirrorReport",
    "PartitionEntry",
    "PartitionLookup",
    "RunOutcome",
    "RunResult",
    "TreeHash",
]
