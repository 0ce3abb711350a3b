"""Tests for caller classification."""

import pytest

from eficlone.invocation.adapter import classify, describe_parameters
from eficlone.models.invocation import CallerKind


class TestClassify:
    def test_shell(self):
        invocation = classify(["/Volumes/Macintosh HD", "/Volumes/Backup"])

        assert invocation.caller == CallerKind.SHELL
        assert invocation.source_volume == "/Volumes/Macintosh HD"
        assert invocation.destination_volume == "/Volumes/Backup"
        assert invocation.preflight_ok
        assert not invocation.verbose
        assert invocation.runnable

    def test_carbon_copy_cloner_success(self):
        invocation = classify(["/Volumes/Source", "/Volumes/Backup", "0", ""])

        assert invocation.caller == CallerKind.CARBON_COPY_CLONER
        assert invocation.source_volume == "/Volumes/Source"
        assert invocation.destination_volume == "/Volumes/Backup"
        assert invocation.preflight_ok
        assert invocation.skip_reason is None
        assert invocation.verbose

    def test_carbon_copy_cloner_failed_task(self):
        invocation = classify(["/Volumes/Source", "/Volumes/Backup", "1", ""])

        assert invocation.caller == CallerKind.CARBON_COPY_CLONER
        assert not invocation.preflight_ok
        assert invocation.skip_reason == "CCC Task failed."
        assert not invocation.runnable

    def test_carbon_copy_cloner_disk_image_destination(self):
        invocation = classify(
            ["/Volumes/Source", "/Volumes/Backup", "0", "/Backups/clone.sparsebundle"]
        )

        assert not invocation.preflight_ok
        assert "disk image" in invocation.skip_reason

    def test_superduper_uses_mount_paths(self):
        invocation = classify(
            [
                "Macintosh HD",
                "/",
                "Backup",
                "/Volumes/Backup",
                "Backup - all files",
                "",
            ]
        )

        assert invocation.caller == CallerKind.SUPERDUPER
        assert invocation.source_volume == "/"
        assert invocation.destination_volume == "/Volumes/Backup"
        assert invocation.preflight_ok

    @pytest.mark.parametrize("count", [0, 1, 3, 5, 7])
    def test_unsupported_counts(self, count):
        invocation = classify([f"p{i}" for i in range(count)])

        assert invocation.caller == CallerKind.UNSUPPORTED
        assert not invocation.supported
        assert not invocation.runnable
        assert invocation.source_volume is None
        assert f"{count} parameters" in invocation.skip_reason


class TestDescribeParameters:
    def test_caller_specific_labels(self):
        lines = describe_parameters(
            CallerKind.CARBON_COPY_CLONER, ["/Volumes/A", "/Volumes/B", "0", ""]
        )

        assert lines == [
            "1: Source Path = /Volumes/A",
            "2: Destination Path = /Volumes/B",
            "3: CCC Exit Status = 0",
            "4: Disk image file path = ",
        ]

    def test_superduper_labels(self):
        lines = describe_parameters(CallerKind.SUPERDUPER, ["a", "b", "c", "d", "e", "f"])

        assert lines[1] == "2: Source Mount Path = b"
        assert lines[5] == "6: Unused parameter 6 = f"
