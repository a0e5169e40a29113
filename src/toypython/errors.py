"""
toypython Error Hierarchy
=========================

This module defines the root of the exception hierarchy for the toypython
translator. All exceptions inherit from ToyPythonError, allowing callers
to catch every translator-related error with a single except clause.

Exception Hierarchy
-------------------
ToyPythonError (base)
└── TranslatorError (see toypython.compiler.errors)
    ├── ToySyntaxError - scanner and parser errors
    ├── CodeGenError - IR generation errors
    ├── MissingReturnError - function body never returns
    ├── IRVerificationError - LLVM rejected the generated module
    └── TranslationError - aggregate report of collected errors

Design Philosophy
-----------------
Each exception captures source location information (filename, line,
column) when applicable. Error messages follow this format:

    filename:line:column: error: description
    source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ToyPythonError(Exception):
    """
    Base exception for all toypython errors.

        try:
            translate_source("return 42;")
        except ToyPythonError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Located Errors
# =============================================================================

class LocatedError(ToyPythonError):
    """
    Error carrying an optional source location, source line, and hint.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.tp:3:1: error: unknown token when expecting an expression (found 'def')
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Error Collection
# =============================================================================

class ErrorCollector:
    """
    Collects errors and warnings for reporting at the end of a translation.

    Translation stops at the first error, so in practice the collector
    holds at most one error; warnings accumulate normally.

    Example:
        collector = ErrorCollector()
        collector.add(UnexpectedTokenError(...))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self):
        self.errors: list[ToyPythonError] = []
        self.warnings: list[str] = []

    def add(self, error: ToyPythonError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(f"warning: {message}")

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))

        for warning in self.warnings:
            lines.append(warning)

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()
