"""Exception hierarchy for scopelint.

Convention violations are never raised; they are returned as
:class:`~scopelint.model.diagnostic.Violation` records.  These exceptions are
reserved for tool-internal failures.
"""

from __future__ import annotations


class ScopelintError(Exception):
    """Base class for all scopelint errors."""


class ConfigError(ScopelintError):
    """Raised when a configuration file cannot be read or has the wrong shape."""


class ParseError(ScopelintError):
    """Raised when stylesheet source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class AnalysisError(ScopelintError, ValueError):
    """Raised when a selector cannot be turned into a valid SelectorPath."""


class AnalysisCancelled(ScopelintError):
    """Raised when a run is cancelled before all units were dispatched."""
