"""Protocol definitions for eficlone collaborators."""

from eficlone.protocols.disk_protocols import (
    BootPartitionProbeProtocol,
    ContainerVolumeProtocol,
    DiskInventoryProtocol,
    LogicalVolumeProtocol,
    MountProtocol,
)
from eficlone.protocols.sync_protocols import (
    MirrorProtocol,
    NotifierProtocol,
    TreeHasherProtocol,
)


__all__ = [
    "BootPartitionProbeProtocol",
    "ContainerVolumeProtocol",
    "DiskInventoryProtocol",
    "LogicalVolumeProtocol",
    "MirrorProtocol",
    "MountProtocol",
    "NotifierProtocol",
    "TreeHasherProtocol",
]
