"""Helper functions for CLI output formatting with Rich integration."""

from eficlone.cli.helpers.theme import Icons, TableStyles, ThemedConsole
from eficlone.models.invocation import Invocation
from eficlone.models.sync import MirrorReport, RunOutcome, RunResult


OUTCOME_HEADLINES = {
    RunOutcome.SKIPPED: "EFI Clone did not run",
    RunOutcome.SIMULATED: "Simulation finished, no files were changed",
    RunOutcome.SUCCESS: "EFI partition cloned and verified",
    RunOutcome.RESOLUTION_FAILED: "EFI partitions could not be resolved",
    RunOutcome.MOUNT_FAILED: "EFI partitions could not be mounted",
    RunOutcome.VERIFICATION_FAILED: "Destination does not match source after copy",
}


def print_invocation(invocation: Invocation, console: ThemedConsole) -> None:
    """Print who called and in which mode."""
    console.print_info(f"Called from {invocation.caller.display_name}")
    if invocation.source_volume or invocation.destination_volume:
        arrow = Icons.get_icon("ARROW", console.icon_mode)
        console.print_list_item(
            f"{invocation.source_volume} {arrow} {invocation.destination_volume}"
        )


def print_mirror_report(report: MirrorReport, console: ThemedConsole) -> None:
    """Print every mirror operation, one per line."""
    heading = "Planned operations" if report.dry_run else "Performed operations"
    console.print_info(f"{heading}: {len(report.operations)}")
    for operation in report.operations:
        console.print_list_item(str(operation), indent=2)
    for path in report.skipped:
        console.print_warning(f"Skipped unsupported entry: {path}")


def print_run_result(
    result: RunResult, console: ThemedConsole, verbose: bool = False
) -> None:
    """Print the outcome of a run.

    Args:
        result: The run result
        console: Console to print to
        verbose: Also print partitions, every mirror operation and the hashes
    """
    if verbose and (result.source_lookup or result.destination_lookup):
        table = TableStyles.create_partition_table(console.icon_mode)
        for side in ("source", "destination"):
            resolution = getattr(result, f"{side}_resolution")
            lookup = getattr(result, f"{side}_lookup")
            table.add_row(
                side.capitalize(),
                resolution.volume_path if resolution else "",
                (resolution.disk_id or "") if resolution else "",
                (lookup.partition_id or lookup.status.value) if lookup else "",
                getattr(result, f"{side}_mount_point") or "",
            )
        console.console.print(table)

    if result.mirror_report is not None:
        if verbose:
            print_mirror_report(result.mirror_report, console)
        else:
            console.print_info(
                f"{len(result.mirror_report.operations)} mirror operations"
                + (" planned" if result.mirror_report.dry_run else "")
            )

    if verbose and result.source_hash and result.destination_hash:
        console.print_list_item(f"Source hash:      {result.source_hash.digest}")
        console.print_list_item(f"Destination hash: {result.destination_hash.digest}")

    for warning in result.warnings:
        console.print_warning(warning)

    headline = OUTCOME_HEADLINES[result.outcome]
    if result.outcome in (RunOutcome.SUCCESS, RunOutcome.SIMULATED):
        console.print_success(headline)
    elif result.outcome == RunOutcome.SKIPPED:
        console.print_warning(headline)
        for message in result.messages:
            console.print_list_item(message)
    else:
        console.print_error(headline)
        for error in result.errors:
            console.print_list_item(error)
