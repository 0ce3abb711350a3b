"""Tests for VolumeIdentityResolver."""

from eficlone.disk.resolver import VolumeIdentityResolver
from eficlone.models.disk import LookupStatus
from tests.fakes import FakeInventory


class TestVolumeIdentityResolver:
    """Test mapping volume paths to whole disks."""

    def test_direct_resolution(self):
        inventory = FakeInventory(whole_disks={"/Volumes/Macintosh HD": "disk1"})
        resolver = VolumeIdentityResolver(inventory)

        resolution = resolver.resolve_disk("/Volumes/Macintosh HD")

        assert resolution.found
        assert resolution.disk_id == "disk1"
        assert resolution.device_node is None
        assert ("device_node_of", "/Volumes/Macintosh HD") not in inventory.calls

    def test_transient_mount_point_falls_back_to_mount_table(self):
        """A snapshot mount unknown to the inventory resolves via its device node."""
        inventory = FakeInventory(
            whole_disks={"/dev/disk1s5": "disk1"},
            device_nodes={"/Volumes/.ccc-snapshot": "/dev/disk1s5"},
        )
        resolver = VolumeIdentityResolver(inventory)

        resolution = resolver.resolve_disk("/Volumes/.ccc-snapshot")

        assert resolution.status == LookupStatus.FOUND
        assert resolution.disk_id == "disk1"
        assert resolution.device_node == "/dev/disk1s5"
        assert inventory.calls == [
            ("whole_disk_of", "/Volumes/.ccc-snapshot"),
            ("device_node_of", "/Volumes/.ccc-snapshot"),
            ("whole_disk_of", "/dev/disk1s5"),
        ]

    def test_not_found_when_mount_table_has_no_entry(self):
        resolver = VolumeIdentityResolver(FakeInventory())

        resolution = resolver.resolve_disk("/Volumes/Gone")

        assert resolution.status == LookupStatus.NOT_FOUND
        assert resolution.disk_id is None
        assert not resolution.found

    def test_not_found_when_device_node_is_unknown(self):
        inventory = FakeInventory(device_nodes={"/Volumes/Odd": "/dev/disk9s1"})
        resolver = VolumeIdentityResolver(inventory)

        resolution = resolver.resolve_disk("/Volumes/Odd")

        assert resolution.status == LookupStatus.NOT_FOUND
        assert resolution.device_node == "/dev/disk9s1"
