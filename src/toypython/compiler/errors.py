"""
Translator Error Hierarchy
==========================

Exceptions raised while scanning, parsing, and generating IR. All of them
inherit from TranslatorError, which itself inherits from ToyPythonError.

Exception Hierarchy
-------------------
TranslatorError (base for all translator errors)
├── ToySyntaxError - scanner and parser errors
│   ├── UnexpectedTokenError - no grammar production matches the token
│   └── NumericLiteralError - literal cannot be represented
├── CodeGenError - IR generation errors
│   ├── UndefinedVariableError - read of a never-assigned name
│   └── UnreachableCodeError - statement after 'return'
├── MissingReturnError - function body never returns
├── IRVerificationError - LLVM rejected the finished module
└── TranslationError - aggregate report, raised by the Translator

Translation stops at the first error: the parser and code generator raise
immediately, and the Translator wraps the single error in a
TranslationError carrying it in ``errors``.
"""

from typing import Optional

from toypython.errors import LocatedError, SourceLocation


class TranslatorError(LocatedError):
    """Base exception for all translator errors."""
    pass


# =============================================================================
# Syntax Errors (Scanner and Parser)
# =============================================================================

class ToySyntaxError(TranslatorError):
    """Syntax error raised by the scanner or the parser."""
    pass


class UnexpectedTokenError(ToySyntaxError):
    """
    Unexpected token during parsing.

    Raised when the current token matches no grammar production at the
    current position, e.g. a bare ``def`` or ``main`` at top level.
    """

    MESSAGE = "unknown token when expecting an expression"

    def __init__(
        self,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.found = found
        super().__init__(
            f"{self.MESSAGE} (found {found})",
            location=location,
            source_line=source_line,
        )


class NumericLiteralError(ToySyntaxError):
    """Numeric literal too large for its floating-point intermediate."""

    def __init__(
        self,
        text: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(
            f"numeric literal '{text}' is out of range",
            location=location,
            source_line=source_line,
        )


class SourceEncodingError(ToySyntaxError):
    """Source bytes that cannot be decoded as text."""

    def __init__(
        self,
        encoding: str,
        reason: str,
        location: Optional[SourceLocation] = None,
    ):
        self.encoding = encoding
        self.reason = reason
        super().__init__(
            f"source text is not valid {encoding} ({reason})",
            location=location,
            hint=f"save the file as {encoding}",
        )


# =============================================================================
# Code Generation Errors
# =============================================================================

class CodeGenError(TranslatorError):
    """
    Error during IR generation.

    Raised when the code generator meets a node or state it cannot
    handle, such as an unknown node class or a second generation pass.
    """
    pass


class UndefinedVariableError(CodeGenError):
    """Variable read before any assignment to it."""

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        known_names: Optional[list[str]] = None,
    ):
        self.name = name
        self.known_names = known_names or []

        hint = None
        if self.known_names:
            names = ", ".join(f"'{n}'" for n in sorted(self.known_names)[:3])
            hint = f"assigned so far: {names}"

        super().__init__(
            f"variable '{name}' is used before assignment",
            location=location,
            hint=hint,
        )


class UnreachableCodeError(CodeGenError):
    """Statement following a 'return' in the same block."""

    def __init__(self, location: Optional[SourceLocation] = None):
        super().__init__(
            "unreachable statement after 'return'",
            location=location,
        )


# =============================================================================
# Verification Errors
# =============================================================================

class MissingReturnError(TranslatorError):
    """The generated function's entry block has no terminator."""

    def __init__(self, function_name: str):
        self.function_name = function_name
        super().__init__(
            f"function '{function_name}' does not return a value",
            hint="end the program with a 'return' statement",
        )


class IRVerificationError(TranslatorError):
    """LLVM rejected the generated module."""
    pass


# =============================================================================
# Aggregate Error
# =============================================================================

class TranslationError(TranslatorError):
    """
    Aggregate translation error.

    The message is an already-formatted report from ErrorCollector and
    is passed through unchanged. The individual errors are kept in
    ``errors``.
    """

    def __init__(self, message: str, errors: Optional[list[TranslatorError]] = None):
        self.errors = list(errors or [])
        super().__init__(message)

    def _format_message(self) -> str:
        """Return message as-is - it's already a formatted report."""
        return self.message
