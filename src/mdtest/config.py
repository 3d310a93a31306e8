"""Configuration management for mdtest."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .constants import CONFIG_FILENAME, DEFAULT_SHELL, SHELL_PRELUDE
from .errors import SetupError


class ShellConfig(BaseModel):
    """Configuration for `sh` steps."""

    exec: str = Field(default=DEFAULT_SHELL, description="Shell binary reading the script on stdin")
    prelude: str = Field(
        default=SHELL_PRELUDE, description="Line prepended to every script before it runs"
    )


class MdtestConfig(BaseModel):
    """Root configuration for mdtest."""

    shell: ShellConfig = Field(default_factory=ShellConfig)


def find_config(directory: Path) -> Path | None:
    """Return the mdtest.toml inside directory, if there is one."""
    config_path = directory / CONFIG_FILENAME
    if config_path.is_file():
        return config_path
    return None


def load_config(path: Path | None = None, directory: Path | None = None) -> MdtestConfig:
    """Load config from a TOML file.

    Args:
        path: Explicit config file; must exist
        directory: Directory searched for mdtest.toml when no path is given

    Returns:
        Loaded configuration, or defaults if no config file is found

    Raises:
        SetupError: If the file is missing, is not valid TOML or holds invalid values
    """
    if path is None:
        path = find_config(directory) if directory is not None else None
        if path is None:
            return MdtestConfig()
    elif not path.is_file():
        raise SetupError(f"{path} is not a file")

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise SetupError(f"Cannot read config {path}: {e}") from e

    try:
        return MdtestConfig.model_validate(data)
    except ValidationError as e:
        raise SetupError(f"Invalid config {path}: {e}") from e
