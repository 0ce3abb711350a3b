"""Mapping of mounted volume paths to the whole disk that holds them."""

from eficlone.core.structlog_logger import StructlogMixin
from eficlone.models.disk import DiskResolution, LookupStatus
from eficlone.protocols.disk_protocols import DiskInventoryProtocol


class VolumeIdentityResolver(StructlogMixin):
    """Resolves a volume path to its whole disk identifier.

    Clone tools on recent macOS hand over transient mount points (snapshot
    mounts) that the disk inventory does not recognize. For those the device
    node is looked up in the mount table and resolved instead.
    """

    def __init__(self, inventory: DiskInventoryProtocol) -> None:
        super().__init__()
        self.inventory = inventory

    def resolve_disk(self, volume_path: str) -> DiskResolution:
        """Resolve volume_path to a whole disk identifier.

        Args:
            volume_path: Mount point or device path of a data volume

        Returns:
            A found resolution carrying the disk identifier, or not_found
        """
        log = self.log_operation("resolve_disk", volume_path=volume_path)

        disk_id = self.inventory.whole_disk_of(volume_path)
        if disk_id:
            log.info("disk_resolved", disk_id=disk_id)
            return DiskResolution(
                volume_path=volume_path, status=LookupStatus.FOUND, disk_id=disk_id
            )

        device_node = self.inventory.device_node_of(volume_path)
        log.debug("mount_table_fallback", device_node=device_node)
        if device_node:
            disk_id = self.inventory.whole_disk_of(device_node)
            if disk_id:
                log.info("disk_resolved", disk_id=disk_id, device_node=device_node)
                return DiskResolution(
                    volume_path=volume_path,
                    status=LookupStatus.FOUND,
                    disk_id=disk_id,
                    device_node=device_node,
                )

        log.warning("disk_not_found")
        return DiskResolution(
            volume_path=volume_path,
            status=LookupStatus.NOT_FOUND,
            device_node=device_node,
        )
