"""Exceptions raised while generating the field mapping.

Every error is fatal for the run: the CLI catches FieldMapError, reports
it on stderr and exits non-zero without writing output.
"""

from __future__ import annotations


class FieldMapError(Exception):
    """Base class for all generator failures."""


class PatternError(FieldMapError):
    """The input glob pattern is malformed."""


class SourceError(FieldMapError):
    """An input file could not be read."""


class OutputError(FieldMapError):
    """The generated file could not be written."""


class GoSyntaxError(FieldMapError):
    """An input file is not valid Go source."""

    def __init__(self, message: str, filename: str, line: int, col: int) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename
        self.line = line
        self.col = col

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.col}: {self.message}"
