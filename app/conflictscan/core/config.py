"""Scan configuration and settings.

This module provides the configuration model and I/O functions for
persistent scan defaults (exclusion patterns, hidden-file handling,
marker matching mode).

Configuration is stored in ~/.config/conflictscan/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from conflictscan.core.paths import get_config_path

logger = logging.getLogger(__name__)


class ScanConfig(BaseModel):
    """Persistent defaults for the scan command.

    Attributes:
        exclude: Glob patterns for entries to skip (name or relative path).
        skip_hidden: Skip dot-prefixed files and directories.
        skip_vcs: Skip version-control metadata directories (.git, .hg, ...).
        match_anywhere: Detect markers anywhere in a line, not only at line start.
    """

    model_config = ConfigDict(extra="forbid")

    exclude: Annotated[
        list[str],
        Field(default_factory=list, description="Glob patterns to exclude"),
    ]
    skip_hidden: Annotated[
        bool,
        Field(description="Skip dot-prefixed entries"),
    ] = False
    skip_vcs: Annotated[
        bool,
        Field(description="Skip version-control metadata directories"),
    ] = False
    match_anywhere: Annotated[
        bool,
        Field(description="Match markers anywhere in a line"),
    ] = False


class ScanConfigError(Exception):
    """Base exception for scan configuration errors."""


class ScanConfigNotFoundError(ScanConfigError):
    """Raised when an explicitly requested config file is not found."""


class ScanConfigParseError(ScanConfigError):
    """Raised when the config file cannot be parsed."""


def load_scan_config(path: Path | None = None) -> ScanConfig:
    """Load scan configuration from a TOML file.

    A missing file at the default location is not an error; defaults are
    returned instead. A missing file that was asked for explicitly is.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated ScanConfig object.

    Raises:
        ScanConfigNotFoundError: If an explicit config file doesn't exist.
        ScanConfigParseError: If the TOML syntax is invalid.
        ScanConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ScanConfigNotFoundError(f"Config file not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return ScanConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ScanConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ScanConfigError(f"Failed to read config: {e}") from e

    try:
        config = ScanConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ScanConfigError(f"Invalid config content: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config


def save_scan_config(config: ScanConfig, path: Path | None = None) -> Path:
    """Save scan configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The ScanConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ScanConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ScanConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: ScanConfig) -> dict[str, object]:
    """Convert ScanConfig to a dictionary for TOML serialization.

    Args:
        config: The ScanConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return {
        "exclude": list(config.exclude),
        "skip_hidden": config.skip_hidden,
        "skip_vcs": config.skip_vcs,
        "match_anywhere": config.match_anywhere,
    }
