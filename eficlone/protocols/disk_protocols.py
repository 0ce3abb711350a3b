"""Protocol definitions for the storage services the resolver and engine consume.

Every query returns ``None`` for "empty" instead of raising, so the layered
fallbacks can test each derivation the same way.
"""

from typing import Protocol, runtime_checkable

from eficlone.models.disk import PartitionEntry


@runtime_checkable
class DiskInventoryProtocol(Protocol):
    """Protocol for disk and volume queries."""

    def list_partitions(self, disk_id: str) -> list[PartitionEntry]:
        """List the partitions of a whole disk.

        Args:
            disk_id: Whole disk identifier, e.g. ``disk2``

        Returns:
            Partitions of the disk, empty if the disk is unknown
        """
        ...

    def whole_disk_of(self, volume_path: str) -> str | None:
        """Return the whole disk that owns a volume path or device node."""
        ...

    def device_node_of(self, volume_path: str) -> str | None:
        """Return the device node backing a path according to the mount table."""
        ...

    def mount_point_of(self, partition_id: str) -> str | None:
        """Return where a partition is mounted, None when it is not mounted."""
        ...


@runtime_checkable
class LogicalVolumeProtocol(Protocol):
    """Protocol for Core Storage style logical volume lookups."""

    def physical_volume_disk_of(self, disk_id: str) -> str | None:
        """Return the whole disk backing a logical volume's physical volume."""
        ...


@runtime_checkable
class ContainerVolumeProtocol(Protocol):
    """Protocol for APFS style container lookups."""

    def physical_store_disk_of(self, container_id: str) -> str | None:
        """Return the whole disk backing a container's physical store."""
        ...


@runtime_checkable
class MountProtocol(Protocol):
    """Protocol for mounting and unmounting partitions."""

    def mount(self, partition_id: str, read_only: bool = False) -> None:
        """Mount a partition.

        Raises:
            MountError: If the partition could not be mounted
        """
        ...

    def unmount(self, partition_id: str) -> None:
        """Unmount a partition.

        Raises:
            UnmountError: If the partition could not be unmounted
        """
        ...


@runtime_checkable
class BootPartitionProbeProtocol(Protocol):
    """Protocol for finding the firmware partition the machine booted from."""

    def current_boot_partition(self) -> str | None:
        """Return the partition identifier, or None if it cannot be determined."""
        ...
