"""diskutil adapter for disk inventory, volume layering and mount operations."""

import plistlib
import re
from typing import Any

from eficlone.core.commands import run_command
from eficlone.core.errors import CommandError, MountError, UnmountError
from eficlone.core.structlog_logger import get_struct_logger
from eficlone.models.disk import PartitionEntry


logger = get_struct_logger(__name__)

DISKUTIL = "diskutil"
WHOLE_DISK_PATTERN = re.compile(r"^(?:/dev/)?(disk\d+)")


def whole_disk_from_identifier(identifier: str) -> str | None:
    """Strip the slice suffix from a device identifier (``disk0s2`` -> ``disk0``)."""
    match = WHOLE_DISK_PATTERN.match(identifier.strip())
    return match.group(1) if match else None


class DiskutilAdapter:
    """macOS implementation of the disk, container and mount services.

    Every query uses the ``-plist`` form of diskutil so no human readable
    output has to be scraped. Queries answer ``None`` (or an empty list) when
    diskutil does not know the object.
    """

    def __init__(
        self, command_timeout: float = 30.0, mount_timeout: float = 60.0
    ) -> None:
        self.command_timeout = command_timeout
        self.mount_timeout = mount_timeout

    def _plist(self, *args: str) -> dict[str, Any] | None:
        command = [DISKUTIL, *args]
        result = run_command(command, timeout=self.command_timeout, text=False)
        if result.returncode != 0:
            return None
        try:
            data = plistlib.loads(result.stdout)
        except (plistlib.InvalidFileException, ValueError) as e:
            logger.warning("unparseable_plist", command=command, error=str(e))
            return None
        return data if isinstance(data, dict) else None

    def _info(self, target: str) -> dict[str, Any] | None:
        return self._plist("info", "-plist", target)

    # Disk inventory

    def whole_disk_of(self, volume_path: str) -> str | None:
        info = self._info(volume_path)
        if not info:
            logger.debug("no_disk_info", target=volume_path)
            return None
        parent = info.get("ParentWholeDisk") or None
        logger.debug("whole_disk_lookup", target=volume_path, whole_disk=parent)
        return parent

    def device_node_of(self, volume_path: str) -> str | None:
        result = run_command(["df", "-P", volume_path], timeout=self.command_timeout)
        if result.returncode != 0:
            return None
        for line in result.stdout.splitlines()[1:]:
            fields = line.split()
            if not fields:
                continue
            # APFS snapshots are listed as "<snapshot name>@/dev/diskNsM"
            device = fields[0].rsplit("@", 1)[-1]
            if device.startswith("/dev/"):
                logger.debug("mount_table_device", path=volume_path, device=device)
                return device
        return None

    def mount_point_of(self, partition_id: str) -> str | None:
        info = self._info(partition_id)
        if not info:
            return None
        return info.get("MountPoint") or None

    def list_partitions(self, disk_id: str) -> list[PartitionEntry]:
        listing = self._plist("list", "-plist", disk_id)
        if not listing:
            return []

        partitions: list[PartitionEntry] = []
        for disk in listing.get("AllDisksAndPartitions", []):
            if disk.get("DeviceIdentifier") != disk_id:
                continue
            for part in disk.get("Partitions", []):
                partitions.append(
                    PartitionEntry(
                        identifier=part.get("DeviceIdentifier", ""),
                        content=part.get("Content", ""),
                        name=part.get("VolumeName", ""),
                        size=part.get("Size", 0),
                    )
                )
        logger.debug(
            "partitions_listed",
            disk_id=disk_id,
            partitions=[p.identifier for p in partitions],
        )
        return partitions

    # Logical volumes (Core Storage)

    def physical_volume_disk_of(self, disk_id: str) -> str | None:
        info = self._info(disk_id)
        if not info:
            return None
        lv_uuid = info.get("DiskUUID")
        if not lv_uuid:
            return None

        cs_list = self._plist("cs", "list", "-plist")
        if not cs_list:
            return None

        for group in cs_list.get("CoreStorageLogicalVolumeGroups", []):
            lv_uuids = {
                volume.get("CoreStorageUUID")
                for family in group.get("CoreStorageLogicalVolumeFamilies", [])
                for volume in family.get("CoreStorageLogicalVolumes", [])
            }
            if lv_uuid not in lv_uuids:
                continue
            for pv in group.get("CoreStoragePhysicalVolumes", []):
                pv_uuid = pv.get("CoreStorageUUID")
                pv_info = self._info(pv_uuid) if pv_uuid else None
                if pv_info and pv_info.get("ParentWholeDisk"):
                    logger.debug(
                        "physical_volume_found",
                        disk_id=disk_id,
                        pv_uuid=pv_uuid,
                        whole_disk=pv_info["ParentWholeDisk"],
                    )
                    return str(pv_info["ParentWholeDisk"])
        return None

    # Containers (APFS)

    def physical_store_disk_of(self, container_id: str) -> str | None:
        apfs_list = self._plist("apfs", "list", "-plist")
        if not apfs_list:
            return None

        for container in apfs_list.get("Containers", []):
            if container.get("ContainerReference") != container_id:
                continue
            stores = [
                store.get("DeviceIdentifier", "")
                for store in container.get("PhysicalStores", [])
            ]
            stores = [store for store in stores if store]
            if not stores:
                return None
            if len(stores) > 1:
                logger.warning(
                    "container_has_multiple_stores",
                    container=container_id,
                    stores=stores,
                    using=stores[0],
                )
            return whole_disk_from_identifier(stores[0])
        return None

    # Mounting

    def mount(self, partition_id: str, read_only: bool = False) -> None:
        command = [DISKUTIL, "quiet", "mount"]
        if read_only:
            command.append("readOnly")
        command.append(f"/dev/{partition_id}")

        try:
            result = run_command(command, timeout=self.mount_timeout)
        except CommandError as e:
            raise MountError(
                f"Could not mount {partition_id}: {e.message}",
                context={"partition": partition_id},
            ) from e
        if result.returncode != 0:
            raise MountError(
                f"Could not mount {partition_id}: {result.stderr.strip() or 'diskutil failed'}",
                context={"partition": partition_id, "returncode": result.returncode},
            )
        logger.info("partition_mounted", partition=partition_id, read_only=read_only)

    def unmount(self, partition_id: str) -> None:
        command = [DISKUTIL, "quiet", "unmount", f"/dev/{partition_id}"]
        try:
            result = run_command(command, timeout=self.mount_timeout)
        except CommandError as e:
            raise UnmountError(
                f"Could not unmount {partition_id}: {e.message}",
                context={"partition": partition_id},
            ) from e
        if result.returncode != 0:
            raise UnmountError(
                f"Could not unmount {partition_id}: {result.stderr.strip() or 'diskutil failed'}",
                context={"partition": partition_id, "returncode": result.returncode},
            )
        logger.info("partition_unmounted", partition=partition_id)


def create_diskutil_adapter(
    command_timeout: float = 30.0, mount_timeout: float = 60.0
) -> DiskutilAdapter:
    """Factory function to create a DiskutilAdapter."""
    return DiskutilAdapter(command_timeout=command_timeout, mount_timeout=mount_timeout)
