"""Disk and firmware partition resolution."""

from eficlone.disk.boot_guard import (
    BootPartitionProbe,
    create_boot_partition_probe,
    partition_uuid_from_device_path,
)
from eficlone.disk.locator import FirmwarePartitionLocator
from eficlone.disk.resolver import VolumeIdentityResolver


__all__ = [
    "BootPartitionProbe",
    "FirmwarePartitionLocator",
    "VolumeIdentityResolver",
    "create_boot_partition_probe",
    "partition_uuid_from_device_path",
]
