"""Fake collaborators and tree helpers shared by the eficlone tests."""

from pathlib import Path

from eficlone.core.errors import MountError, UnmountError
from eficlone.models.disk import PartitionEntry


class FakeInventory:
    """In-memory disk inventory."""

    def __init__(
        self,
        partitions: dict[str, list[PartitionEntry]] | None = None,
        whole_disks: dict[str, str] | None = None,
        device_nodes: dict[str, str] | None = None,
        mount_points: dict[str, str] | None = None,
    ) -> None:
        self.partitions = partitions or {}
        self.whole_disks = whole_disks or {}
        self.device_nodes = device_nodes or {}
        self.mount_points = mount_points or {}
        self.calls: list[tuple[str, str]] = []

    def list_partitions(self, disk_id: str) -> list[PartitionEntry]:
        self.calls.append(("list_partitions", disk_id))
        return list(self.partitions.get(disk_id, []))

    def whole_disk_of(self, volume_path: str) -> str | None:
        self.calls.append(("whole_disk_of", volume_path))
        return self.whole_disks.get(volume_path)

    def device_node_of(self, volume_path: str) -> str | None:
        self.calls.append(("device_node_of", volume_path))
        return self.device_nodes.get(volume_path)

    def mount_point_of(self, partition_id: str) -> str | None:
        self.calls.append(("mount_point_of", partition_id))
        return self.mount_points.get(partition_id)


class FakeLogicalVolumes:
    def __init__(self, mapping: dict[str, str] | None = None) -> None:
        self.mapping = mapping or {}
        self.calls: list[str] = []

    def physical_volume_disk_of(self, disk_id: str) -> str | None:
        self.calls.append(disk_id)
        return self.mapping.get(disk_id)


class FakeContainers:
    def __init__(self, mapping: dict[str, str] | None = None) -> None:
        self.mapping = mapping or {}
        self.calls: list[str] = []

    def physical_store_disk_of(self, container_id: str) -> str | None:
        self.calls.append(container_id)
        return self.mapping.get(container_id)


class FakeMounter:
    """Records mount and unmount calls; mounting publishes the mount point."""

    def __init__(
        self,
        inventory: FakeInventory,
        targets: dict[str, Path] | None = None,
        fail_mount: set[str] | None = None,
        fail_unmount: set[str] | None = None,
    ) -> None:
        self.inventory = inventory
        self.targets = targets or {}
        self.fail_mount = fail_mount or set()
        self.fail_unmount = fail_unmount or set()
        self.calls: list[tuple[str, str, bool]] = []

    def mount(self, partition_id: str, read_only: bool = False) -> None:
        self.calls.append(("mount", partition_id, read_only))
        if partition_id in self.fail_mount:
            raise MountError(f"Could not mount {partition_id}")
        if partition_id in self.targets:
            self.inventory.mount_points[partition_id] = str(self.targets[partition_id])

    def unmount(self, partition_id: str) -> None:
        self.calls.append(("unmount", partition_id, False))
        if partition_id in self.fail_unmount:
            raise UnmountError(f"Could not unmount {partition_id}")
        self.inventory.mount_points.pop(partition_id, None)

    @property
    def mounted(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "mount"]

    @property
    def unmounted(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "unmount"]


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str, title: str = "EFI Clone") -> None:
        self.messages.append(message)


class FakeBootProbe:
    def __init__(self, partition: str | None = None) -> None:
        self.partition = partition

    def current_boot_partition(self) -> str | None:
        return self.partition


def efi(identifier: str, content: str = "EFI") -> PartitionEntry:
    return PartitionEntry(identifier=identifier, content=content, name="EFI")


def data(identifier: str, content: str = "Apple_APFS") -> PartitionEntry:
    return PartitionEntry(identifier=identifier, content=content, name="Macintosh HD")


def write_tree(root: Path, files: dict[str, str | bytes]) -> None:
    """Create files below root from a {relative path: content} mapping."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)


def read_tree(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


class DiskWorld:
    """A plain GPT source disk and a plain GPT backup disk, wired to fakes."""

    SOURCE_VOLUME = "/Volumes/Macintosh HD"
    DESTINATION_VOLUME = "/Volumes/Backup"

    def __init__(self, source_efi: Path, destination_efi: Path) -> None:
        self.inventory = FakeInventory(
            partitions={
                "disk0": [efi("disk0s1"), data("disk0s2")],
                "disk2": [efi("disk2s1"), data("disk2s2")],
            },
            whole_disks={
                self.SOURCE_VOLUME: "disk0",
                self.DESTINATION_VOLUME: "disk2",
            },
        )
        self.logical_volumes = FakeLogicalVolumes()
        self.containers = FakeContainers()
        self.mounter = FakeMounter(
            self.inventory,
            targets={"disk0s1": source_efi, "disk2s1": destination_efi},
        )
        self.notifier = RecordingNotifier()
        self.boot_probe = FakeBootProbe()

