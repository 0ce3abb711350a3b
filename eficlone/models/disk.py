"""Disk, partition and lookup models.

Resolution steps return tagged results rather than raising: a lookup is either
``found`` with exactly one identifier, ``not_found``, or ``ambiguous`` with the
competing candidates. The engine decides what each tag means for the run.
"""

from enum import Enum

from pydantic import Field

from eficlone.models.base import EfiCloneBaseModel


# GPT partition type GUID of an EFI System Partition
EFI_PARTITION_TYPE_GUID = "C12A7328-F81F-11D2-BA4B-00A0C93EC93B"

DEFAULT_FIRMWARE_CONTENT_TYPES = ["EFI", EFI_PARTITION_TYPE_GUID]


class LookupStatus(str, Enum):
    """Outcome tag of a resolution step."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"


class LookupTier(str, Enum):
    """Which firmware partition lookup tier produced a result."""

    DIRECT = "direct"
    LOGICAL_VOLUME = "logical_volume"
    CONTAINER = "container"


class PartitionEntry(EfiCloneBaseModel):
    """One partition slot on a whole disk."""

    identifier: str
    content: str = ""
    name: str = ""
    size: int = 0

    def is_firmware(self, content_types: list[str]) -> bool:
        """Check whether this partition carries one of the firmware type labels."""
        wanted = {content_type.upper() for content_type in content_types}
        return self.content.upper() in wanted


class DiskResolution(EfiCloneBaseModel):
    """Result of mapping a mounted volume path to its whole disk."""

    volume_path: str
    status: LookupStatus
    disk_id: str | None = None
    device_node: str | None = Field(
        default=None,
        description="Device node found through the mount table, if that fallback was used",
    )

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND


class PartitionLookup(EfiCloneBaseModel):
    """Result of locating the firmware partition of a disk."""

    disk_id: str
    status: LookupStatus
    partition_id: str | None = None
    candidates: list[str] = Field(default_factory=list)
    searched_disk: str | None = Field(
        default=None, description="Disk on which the partition was searched last"
    )
    tier: LookupTier | None = None

    @property
    def found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def ambiguous(self) -> bool:
        return self.status == LookupStatus.AMBIGUOUS


__all__ = [
    "DEFAULT_FIRMWARE_CONTENT_TYPES",
    "EFI_PARTITION_TYPE_GUID",
    "DiskResolution",
    "LookupStatus",
    "LookupTier",
    "PartitionEntry",
    "PartitionLookup",
]
