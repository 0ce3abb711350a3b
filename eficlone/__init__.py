"""eficlone - EFI System Partition sync and verify hook for disk clones."""

from importlib.metadata import distribution


__version__ = distribution(__package__ or "eficlone").version

__all__ = ["__version__"]
