"""
Settings for an import, read from TOML.

Two files are consulted, lowest priority first:

- ``~/.config/kicad-eagle/config.toml`` for the user
- ``.kicad-eagle.toml`` (or ``kicad-eagle.toml``) in the schematic's
  project, found by walking up from the start directory

Keys left out of both keep the dataclass defaults. A ``Config`` passed
straight to :func:`kicad_eagle.load` bypasses the files altogether.
"""

from __future__ import annotations

import sys
import warnings
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Iterator

from .exceptions import ConfigError

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

# Checked in this order in every directory of the walk
CONFIG_FILENAMES = [".kicad-eagle.toml", "kicad-eagle.toml"]

USER_CONFIG_PATH = Path.home() / ".config" / "kicad-eagle" / "config.toml"

# "import" is a keyword, so its table lands on Config.importer
SECTION_ATTRS = {
    "defaults": "defaults",
    "import": "importer",
}


@dataclass
class DefaultsConfig:
    """Logging switches."""

    verbose: bool = False
    quiet: bool = False


@dataclass
class ImportConfig:
    """Layout constants used while assembling sheets (native mils)."""

    check_header: bool = True
    page_margin: int = 1500
    grid: int = 100
    bus_entry_size: int = 100
    sheet_spacing: int = 1000
    sheet_columns: int = 10
    label_tolerance: int = 0


@dataclass
class Config:
    """Both sections, plus the file each overridden key was read from."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    importer: ImportConfig = field(default_factory=ImportConfig)

    # "import.grid" -> path of the file that set it
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Build a config from the user file and the nearest project file.

        Args:
            start_dir: Where the project file search begins (default: cwd)

        Returns:
            Config with the project file applied over the user file
        """
        config = cls()
        sources: dict[str, str] = {}

        for path in _config_files(start_dir if start_dir is not None else Path.cwd()):
            data = _load_toml_file(path)
            if data:
                _merge_config(config, data, str(path), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """File that set ``key`` (e.g. ``import.grid``), or ``"default"``."""
        return self._sources.get(key, "default")


def _config_files(start_dir: Path) -> Iterator[Path]:
    """Existing config files, user file first."""
    if USER_CONFIG_PATH.exists():
        yield USER_CONFIG_PATH
    project_config = _find_project_config(start_dir)
    if project_config is not None:
        yield project_config


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Nearest project config at or above ``start_dir``.

    A directory holding ``.git`` is the last one searched.

    Args:
        start_dir: Directory the walk begins in

    Returns:
        The config path, or None when the walk finds nothing
    """
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        if (directory / ".git").exists():
            return None
    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Parse one config file.

    Returns:
        The TOML tables, or None when no TOML reader is installed

    Raises:
        ConfigError: On a syntax error or a file that cannot be opened
    """
    if tomllib is None:
        warnings.warn(
            f"Ignoring {path}: reading config files on Python < 3.11 needs 'tomli'",
            stacklevel=2,
        )
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """Apply every known table of one file; warn about the rest."""
    for key in data:
        if key not in SECTION_ATTRS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section, attr in SECTION_ATTRS.items():
        if section in data:
            _merge_section(getattr(config, attr), data[section], section, source, sources)


def _merge_section(
    target: Any, data: dict[str, Any], section: str, source: str, sources: dict[str, str]
) -> None:
    """Copy known keys of one TOML table onto a section dataclass."""
    known = {f.name: f for f in fields(target)}
    for key, value in data.items():
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)
            continue

        expected = type(getattr(target, key))
        # bool is an int subclass; keep the two apart
        if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
            raise ConfigError(
                f"Config key '{section}.{key}' must be {expected.__name__}",
                context={"file": source, "value": repr(value)},
            )

        setattr(target, key, value)
        sources[f"{section}.{key}"] = source


def generate_template() -> str:
    """Commented-out TOML listing every option at its default."""
    return """# kicad-eagle configuration file
# Save as .kicad-eagle.toml beside the schematic, or as
# ~/.config/kicad-eagle/config.toml to apply to every import

[defaults]
# Log every library, sheet and diagnostic while importing
# verbose = false

# Only log errors
# quiet = false

[import]
# Refuse files whose first three lines are not an EAGLE header
# check_header = true

# Space added around the imported drawing when the page is grown (mils)
# page_margin = 1500

# Grid the recentring translation snaps to (mils)
# grid = 100

# Length of a synthesized bus entry along each axis (mils)
# bus_entry_size = 100

# Pitch of sheet symbols on the root page of a multi-sheet import (mils)
# sheet_spacing = 1000

# Grid column after which sheet symbols wrap to a new row
# sheet_columns = 10

# Distance a label may sit from its wire and still count as on it (mils)
# label_tolerance = 0
"""


def get_config_paths() -> dict[str, Path | None]:
    """The user and project files a load from the cwd would read (None if absent)."""
    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": _find_project_config(Path.cwd()),
    }
