"""Firmware partition lookup across plain, logical-volume and container layouts."""

from eficlone.core.structlog_logger import StructlogMixin
from eficlone.models.disk import (
    DEFAULT_FIRMWARE_CONTENT_TYPES,
    LookupStatus,
    LookupTier,
    PartitionLookup,
)
from eficlone.protocols.disk_protocols import (
    ContainerVolumeProtocol,
    DiskInventoryProtocol,
    LogicalVolumeProtocol,
)


class FirmwarePartitionLocator(StructlogMixin):
    """Finds the single firmware partition belonging to a whole disk.

    Lookup runs in three tiers and stops at the first tier that finds
    anything:

    1. direct: firmware partitions on the disk itself
    2. logical_volume: on the disk holding the logical volume's physical
       volume, or the disk itself when it is not a logical volume
    3. container: on the disk holding the container's physical store

    More than one firmware partition at a tier is reported as ambiguous and
    the later tiers are not consulted.
    """

    def __init__(
        self,
        inventory: DiskInventoryProtocol,
        logical_volumes: LogicalVolumeProtocol,
        containers: ContainerVolumeProtocol,
        content_types: list[str] | None = None,
    ) -> None:
        super().__init__()
        self.inventory = inventory
        self.logical_volumes = logical_volumes
        self.containers = containers
        self.content_types = list(content_types or DEFAULT_FIRMWARE_CONTENT_TYPES)

    def locate_firmware_partition(self, disk_id: str) -> PartitionLookup:
        log = self.log_operation("locate_firmware_partition", disk_id=disk_id)

        lookup = self._search(disk_id, disk_id, LookupTier.DIRECT)
        if lookup.status != LookupStatus.NOT_FOUND:
            return lookup

        pv_disk = self.logical_volumes.physical_volume_disk_of(disk_id) or disk_id
        log.debug("logical_volume_tier", physical_disk=pv_disk)
        lookup = self._search(disk_id, pv_disk, LookupTier.LOGICAL_VOLUME)
        if lookup.status != LookupStatus.NOT_FOUND:
            return lookup

        store_disk = self.containers.physical_store_disk_of(disk_id)
        log.debug("container_tier", physical_store_disk=store_disk)
        if store_disk:
            lookup = self._search(disk_id, store_disk, LookupTier.CONTAINER)
            if lookup.status != LookupStatus.NOT_FOUND:
                return lookup

        log.warning("firmware_partition_not_found")
        return PartitionLookup(
            disk_id=disk_id,
            status=LookupStatus.NOT_FOUND,
            searched_disk=store_disk or pv_disk,
        )

    def _search(
        self, disk_id: str, search_disk: str, tier: LookupTier
    ) -> PartitionLookup:
        candidates = [
            partition.identifier
            for partition in self.inventory.list_partitions(search_disk)
            if partition.is_firmware(self.content_types)
        ]
        log = self.log_operation(
            "firmware_partition_search",
            disk_id=disk_id,
            searched_disk=search_disk,
            tier=tier.value,
        )

        if len(candidates) > 1:
            log.error("firmware_partition_ambiguous", candidates=candidates)
            return PartitionLookup(
                disk_id=disk_id,
                status=LookupStatus.AMBIGUOUS,
                candidates=candidates,
                searched_disk=search_disk,
                tier=tier,
            )
        if candidates:
            log.info("firmware_partition_found", partition_id=candidates[0])
            return PartitionLookup(
                disk_id=disk_id,
                status=LookupStatus.FOUND,
                partition_id=candidates[0],
                candidates=candidates,
                searched_disk=search_disk,
                tier=tier,
            )
        return PartitionLookup(
            disk_id=disk_id,
            status=LookupStatus.NOT_FOUND,
            searched_disk=search_disk,
            tier=tier,
        )
