"""Name conversion between EAGLE and native conventions."""

from __future__ import annotations

import re

# Characters that are not allowed in a file name on at least one platform
_ILLEGAL_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\s]')


def escape_name(name: str) -> str:
    """Convert EAGLE overbar markers to native ones.

    EAGLE writes ``!RESET`` for an active-low signal; the native notation is
    ``~RESET``. Literal tildes are doubled first so they survive.
    """
    return name.replace("~", "~~").replace("!", "~")


def part_name(deviceset: str, device: str) -> str:
    """Native part name for a deviceset/device pair (wildcards removed)."""
    return (deviceset + device).replace("*", "")


def sheet_file_name(name: str) -> str:
    """File name for a sheet: illegal characters and spaces become ``_``."""
    return _ILLEGAL_FILENAME_CHARS.sub("_", name) + ".sch"
