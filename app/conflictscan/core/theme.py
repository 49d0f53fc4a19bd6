"""Console colours for scan output.

The palette ships as ``conflictscan/data/theme.toml``. A ``[colors]`` table
in the user's ``theme.toml`` may override any subset of it.
"""

import functools
import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from conflictscan.core.paths import get_theme_path

logger = logging.getLogger(__name__)

# Styles rendered in bold on top of their colour
_BOLD_STYLES = frozenset({"error", "finding"})


def _check_hex(name: str, value: object) -> str:
    if not isinstance(value, str):
        msg = f"{name}: color must be a string"
        raise ValueError(msg)
    color = value.strip()
    if not color.startswith("#"):
        msg = f"{name}: color must start with '#'"
        raise ValueError(msg)
    digits = color[1:]
    if len(digits) not in (3, 6):
        msg = f"{name}: color must be #RGB or #RRGGBB format"
        raise ValueError(msg)
    try:
        int(digits, 16)
    except ValueError:
        msg = f"{name}: invalid hex color '{color}'"
        raise ValueError(msg) from None
    return color


class ThemeColors(BaseModel):
    """Hex colours used by the scan output."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Conflicted file paths, marker lines, plain paths
    finding: str = "#f53263"
    marker: str = "#faf870"
    path: str = "#69B9A1"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        return _check_hex(info.field_name, v)


def get_bundled_theme_path() -> Path:
    """Location of the palette shipped with the package."""
    return resources.files("conflictscan.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are dropped. Returns None when the file is missing,
    unreadable or not valid TOML.
    """
    try:
        data = tomllib.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Ignoring malformed theme file %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Cannot read theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled palette with the user's overrides.

    An override that fails validation discards the whole theme in favour
    of the ThemeColors defaults.
    """
    merged: dict[str, str] = {}
    for layer in (Path(get_bundled_theme_path()), get_theme_path()):
        colors = _load_toml_colors(layer)
        if colors:
            logger.debug("Theme colors loaded from %s", layer)
            merged.update(colors)

    try:
        return ThemeColors(**merged)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by both consoles.

    Args:
        colors: Palette to use. Loaded with load_theme() when omitted.
    """
    colors = colors or load_theme()
    styles = {
        name: f"bold {value}" if name in _BOLD_STYLES else value
        for name, value in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


@functools.cache
def get_theme() -> Theme:
    """Rich theme for this process, loaded on first use."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Drop the cached theme and load it again from disk."""
    get_theme.cache_clear()
    return get_theme()
