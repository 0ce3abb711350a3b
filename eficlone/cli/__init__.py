"""CLI module for eficlone."""

from eficlone.cli.app import app, main


__all__ = ["app", "main"]
