"""
kicad-eagle Logging Configuration

Verbose logging helpers for following an import as it runs.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``kicad_eagle`` logger configured here.
"""

import logging

# Package-level logger; module loggers propagate to it
_logger = logging.getLogger("kicad_eagle")
_logger.addHandler(logging.NullHandler())  # Default: no output

# Whether the current level came from configure_from_flags
_set_by_flags = False


def enable_verbose(level: str = "INFO", format: str = None) -> None:
    """Enable verbose logging for debugging.

    Args:
        level: Logging level - "DEBUG", "INFO", "WARNING", "ERROR"
        format: Optional custom format string

    Example:
        enable_verbose("DEBUG")

        doc = kicad_eagle.load("project.sch")  # logs each library and sheet

        disable_verbose()
    """
    _logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)

    # Add console handler
    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, level.upper()))

    if format is None:
        format = "[%(levelname)s] %(name)s: %(message)s"

    handler.setFormatter(logging.Formatter(format))
    _logger.addHandler(handler)


def disable_verbose() -> None:
    """Disable verbose logging."""
    global _set_by_flags
    _set_by_flags = False
    _logger.setLevel(logging.WARNING)
    for handler in _logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            _logger.removeHandler(handler)


def configure_from_flags(verbose: bool = False, quiet: bool = False) -> None:
    """Apply the ``[defaults]`` verbose/quiet switches from a config file.

    With neither switch set, a level left behind by an earlier call is
    undone, so one quiet import does not silence the ones after it.
    """
    global _set_by_flags
    if quiet:
        disable_verbose()
        _logger.setLevel(logging.ERROR)
        _set_by_flags = True
    elif verbose:
        enable_verbose("DEBUG")
        _set_by_flags = True
    elif _set_by_flags:
        disable_verbose()
        _logger.setLevel(logging.NOTSET)
        _set_by_flags = False
