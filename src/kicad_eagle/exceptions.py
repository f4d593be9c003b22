"""
Custom exception hierarchy for kicad-eagle.

Provides consistent error handling with context, suggestions, and actionable guidance.
All exceptions include:
- Context information (file paths, line numbers, element and attribute names)
- Suggestions for how to fix the issue
- Clear, formatted error messages

Fatal errors abort the import. Recoverable problems (an instance whose part
cannot be found, a bus crossing without a usable entry direction) are not
raised; they are reported as :class:`~kicad_eagle.importer.session.Diagnostic`
records instead.

Example::

    from kicad_eagle.exceptions import MissingAttributeError

    raise MissingAttributeError(
        "wire",
        "x1",
        context={"file": "board.sch", "line": 42},
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class KiCadEagleError(Exception):
    """
    Base exception for all kicad-eagle errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (file, line, element, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class FileAccessError(KiCadEagleError):
    """
    The source file exists but could not be read.

    Example::

        raise FileAccessError(
            "Unable to read file",
            context={"file": "project.sch", "reason": "Permission denied"},
        )
    """

    pass


class FileNotFoundError(FileAccessError):
    """
    The source file does not exist.

    Shadows the builtin inside this package so callers can catch every
    file-access failure through :class:`FileAccessError`.
    """

    pass


class FileFormatError(KiCadEagleError):
    """
    File is not an EAGLE schematic.

    Raised when the header lines do not announce an ``<eagle>`` document.

    Example::

        raise FileFormatError(
            "Not an EAGLE schematic",
            context={"file": "board.kicad_sch", "line 1": "(kicad_sch"},
            suggestions=["Open the .sch file exported by EAGLE 6 or later"],
        )
    """

    pass


class ParseError(KiCadEagleError):
    """
    XML parsing or document structure error.

    Raised when the markup is malformed or the tree does not contain what
    the EAGLE format requires.

    Example::

        raise ParseError(
            "Opening and ending tag mismatch",
            file_path="project.sch",
            line=120,
        )
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        line: Optional[int] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        # Build context from convenience parameters
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)
        if line is not None and "line" not in ctx:
            ctx["line"] = line

        super().__init__(message, ctx, suggestions)


class MissingElementError(ParseError):
    """A child element the format requires is absent."""

    def __init__(
        self,
        parent: str,
        element: str,
        context: Optional[Dict[str, Any]] = None,
        line: Optional[int] = None,
    ):
        self.parent = parent
        self.element = element
        super().__init__(
            f"<{parent}> is missing required child <{element}>",
            context=context,
            line=line,
        )


class MissingAttributeError(ParseError):
    """A required attribute is absent from an element."""

    def __init__(
        self,
        element: str,
        attribute: str,
        context: Optional[Dict[str, Any]] = None,
        line: Optional[int] = None,
    ):
        self.element = element
        self.attribute = attribute
        super().__init__(
            f"<{element}> is missing required attribute '{attribute}'",
            context=context,
            line=line,
        )


class AttributeValueError(ParseError):
    """
    An attribute is present but its value cannot be converted.

    Covers malformed numbers, booleans other than yes/no, unknown
    enumeration keywords and malformed rotation strings.

    Example::

        raise AttributeValueError("pin", "rot", "R45x", expected="[S][M]R<degrees>")
    """

    def __init__(
        self,
        element: str,
        attribute: str,
        value: str,
        expected: str = "",
        context: Optional[Dict[str, Any]] = None,
        line: Optional[int] = None,
    ):
        self.element = element
        self.attribute = attribute
        self.value = value
        self.expected = expected
        ctx = dict(context or {})
        if expected:
            ctx.setdefault("expected", expected)
        super().__init__(
            f"<{element}> attribute '{attribute}' has invalid value {value!r}",
            context=ctx,
            line=line,
        )


class ConfigError(KiCadEagleError):
    """Configuration file is invalid or unreadable."""

    pass


__all__ = [
    "KiCadEagleError",
    "FileAccessError",
    "FileNotFoundError",
    "FileFormatError",
    "ParseError",
    "MissingElementError",
    "MissingAttributeError",
    "AttributeValueError",
    "ConfigError",
]
