"""Classification of the positional parameters a clone tool passes to its hook.

The caller is recognized purely by the number of parameters:

==========  ======================  ==========================================
count       caller                  parameters
==========  ======================  ==========================================
2           shell                   source path, destination path
4           Carbon Copy Cloner      source path, destination path, CCC exit
                                    status, disk image file path
6           SuperDuper!             source disk name, source mount path,
                                    destination disk name, destination mount
                                    path, backup script, unused
==========  ======================  ==========================================
"""

from eficlone.core.structlog_logger import get_struct_logger
from eficlone.models.invocation import CallerKind, Invocation


logger = get_struct_logger(__name__)

PARAMETER_LABELS: dict[CallerKind, list[str]] = {
    CallerKind.SHELL: ["Source Path", "Destination Path"],
    CallerKind.CARBON_COPY_CLONER: [
        "Source Path",
        "Destination Path",
        "CCC Exit Status",
        "Disk image file path",
    ],
    CallerKind.SUPERDUPER: [
        "Source Disk Name",
        "Source Mount Path",
        "Destination Disk Name",
        "Destination Mount Path",
        "SuperDuper! Backup Script Used",
        "Unused parameter 6",
    ],
}

CALLER_BY_COUNT = {len(labels): kind for kind, labels in PARAMETER_LABELS.items()}


def describe_parameters(caller: CallerKind, parameters: list[str]) -> list[str]:
    """Render each parameter with the meaning it has for the caller."""
    labels = PARAMETER_LABELS.get(caller, [])
    return [
        f"{position}: {labels[position - 1] if position <= len(labels) else 'Parameter'} = {value}"
        for position, value in enumerate(parameters, start=1)
    ]


def classify(parameters: list[str]) -> Invocation:
    """Work out who called the hook and which volumes to synchronize.

    Args:
        parameters: Positional parameters exactly as received

    Returns:
        The invocation. Unsupported shapes and failed caller preflight
        checks are reported on the invocation, never raised.
    """
    parameters = list(parameters)
    caller = CALLER_BY_COUNT.get(len(parameters), CallerKind.UNSUPPORTED)

    if caller == CallerKind.UNSUPPORTED:
        reason = (
            f"{len(parameters)} parameters were passed in. "
            "This is an unsupported number of parameters."
        )
        logger.warning("unsupported_invocation", count=len(parameters))
        return Invocation(caller=caller, parameters=parameters, skip_reason=reason)

    logger.info("invocation_classified", caller=caller.display_name)
    for line in describe_parameters(caller, parameters):
        logger.info("invocation_parameter", detail=line)

    if caller == CallerKind.SUPERDUPER:
        return Invocation(
            caller=caller,
            parameters=parameters,
            source_volume=parameters[1],
            destination_volume=parameters[3],
        )

    invocation = Invocation(
        caller=caller,
        parameters=parameters,
        source_volume=parameters[0],
        destination_volume=parameters[1],
        verbose=caller == CallerKind.CARBON_COPY_CLONER,
    )
    if caller == CallerKind.CARBON_COPY_CLONER:
        return _check_ccc_preflight(invocation)
    return invocation


def _check_ccc_preflight(invocation: Invocation) -> Invocation:
    exit_status, image_path = invocation.parameters[2], invocation.parameters[3]

    if exit_status != "0":
        logger.warning("ccc_task_failed", ccc_exit_status=exit_status)
        invocation.preflight_ok = False
        invocation.skip_reason = "CCC Task failed."
    elif image_path != "":
        logger.warning("ccc_destination_is_disk_image", image_path=image_path)
        invocation.preflight_ok = False
        invocation.skip_reason = "CCC Clone destination was a disk image."
    else:
        logger.info("ccc_preflight_passed")
    return invocation
