"""
User configuration management for eficlone.

Settings are loaded from multiple sources:
1. Command-line overrides (highest precedence)
2. Environment variables (EFICLONE_*)
3. Command-line provided config file
4. Config file in current directory
5. User's XDG config directory, then the system-wide directory
6. Default values (lowest precedence)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from eficlone.config.settings import EfiCloneSettings
from eficlone.core.errors import ConfigError
from eficlone.core.structlog_logger import get_struct_logger


logger = get_struct_logger(__name__)

SYSTEM_CONFIG_DIR = Path("/Library/Application Support/eficlone")


class UserConfig:
    """Locates the YAML config file and builds the run settings from it."""

    def __init__(self, cli_config_path: str | Path | None = None):
        """
        Args:
            cli_config_path: Optional config file path provided via CLI. A path
                given explicitly must exist.
        """
        self._cli_config_path = (
            Path(cli_config_path).expanduser() if cli_config_path else None
        )
        self.config_paths = self._generate_config_paths(self._cli_config_path)
        self.config_path: Path | None = None
        self.settings = self._load_config()

    def _generate_config_paths(self, cli_config_path: Path | None) -> list[Path]:
        """Generate a list of config paths to search in order of precedence."""
        config_paths = []

        if cli_config_path:
            config_paths.append(cli_config_path)

        config_paths.extend(
            [Path.cwd() / "eficlone.yaml", Path.cwd() / ".eficlone.yml"]
        )

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        config_home = (
            Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
        )
        config_paths.extend(
            [
                config_home / "eficlone" / "config.yaml",
                config_home / "eficlone" / "config.yml",
                SYSTEM_CONFIG_DIR / "config.yaml",
            ]
        )
        return config_paths

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    def _load_config(self) -> EfiCloneSettings:
        if self._cli_config_path and not self._cli_config_path.exists():
            raise ConfigError(f"Config file not found: {self._cli_config_path}")

        config_data: dict[str, Any] = {}
        for path in self.config_paths:
            if path.is_file():
                config_data = self._read_yaml(path)
                self.config_path = path
                logger.debug("config_file_loaded", path=str(path), keys=list(config_data))
                break
        else:
            logger.debug(
                "no_config_file_found", searched=[str(p) for p in self.config_paths]
            )

        try:
            return EfiCloneSettings(**config_data)
        except ValidationError as e:
            source = str(self.config_path) if self.config_path else "environment"
            raise ConfigError(f"Invalid configuration in {source}: {e}") from e

    def apply_overrides(self, **overrides: Any) -> EfiCloneSettings:
        """Apply command-line overrides; ``None`` values leave a setting unchanged."""
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in EfiCloneSettings.model_fields:
                raise ConfigError(f"Unknown setting: {key}")
            try:
                setattr(self.settings, key, value)
            except ValidationError as e:
                raise ConfigError(f"Invalid value for {key}: {e}") from e
        return self.settings


def create_user_config(cli_config_path: str | Path | None = None) -> UserConfig:
    """Factory function to create a UserConfig."""
    return UserConfig(cli_config_path=cli_config_path)
