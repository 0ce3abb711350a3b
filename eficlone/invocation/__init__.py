"""Recognition of the tool that invoked the hook."""

from eficlone.invocation.adapter import classify, describe_parameters


__all__ = ["classify", "describe_parameters"]
