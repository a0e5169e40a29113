"""
toypython Scanner (Tokenizer)
=============================

This module implements the scanner for the toypython language. It pulls
characters one at a time from a text stream and hands out classified
tokens on demand, one per ``next_token()`` call.

Token Categories
----------------
- Keywords: def, main, return
- Identifiers: a letter followed by letters or digits
- Numbers: runs of digits and dots, converted to an integer
- Assignment: = (there is no ==)
- Raw characters: anything else, e.g. ';', carrying the character code

Comments
--------
- Single-line: # comment

Numeric Literals
----------------
A number is any run of digits and dots. The value is taken from the
longest valid decimal prefix of that run, read as a float and truncated
toward zero:

| Text    | Value |
|---------|-------|
| 42      | 42    |
| 3.9     | 3     |
| 1.2.3   | 1     |
| .       | 0     |

Example Usage
-------------
>>> from toypython.compiler.lexer import scan_tokens
>>> for token in scan_tokens('x = 5; return x;'):
...     print(token)
Token(IDENTIFIER, 'x', 1:1)
Token(ASSIGN, 1:3)
Token(NUMBER, 5, 1:5)
Token(CHAR, ';', 1:6)
Token(RETURN, 1:8)
Token(IDENTIFIER, 'x', 1:15)
Token(CHAR, ';', 1:16)
Token(EOF, 1:17)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, TextIO
import io
import math
import re
import string

from toypython.errors import SourceLocation
from toypython.compiler.errors import NumericLiteralError, SourceEncodingError


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types for the toypython language."""

    EOF = auto()            # End of input
    DEF = auto()            # def (function keyword, no parser production)
    RETURN = auto()         # return
    MAIN = auto()           # main (no parser production)
    ASSIGN = auto()         # =
    IDENTIFIER = auto()     # Variable names
    NUMBER = auto()         # Integer literals
    CHAR = auto()           # Any other single character


KEYWORDS: dict[str, TokenType] = {
    "def": TokenType.DEF,
    "main": TokenType.MAIN,
    "return": TokenType.RETURN,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token produced by the scanner.

    Attributes:
        type: The TokenType classification
        value: Text for identifiers, int for numbers, the character code
               for CHAR tokens, None otherwise
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: str | int | None
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.type == TokenType.CHAR:
            return f"Token(CHAR, {chr(self.value)!r}, {self.line}:{self.column})"
        if self.value is not None:
            if isinstance(self.value, int):
                return f"Token({self.type.name}, {self.value}, {self.line}:{self.column})"
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_char(self, char: str) -> bool:
        """Return True if this is a raw-character token for ``char``."""
        return self.type == TokenType.CHAR and self.value == ord(char)

    def describe(self) -> str:
        """Human-readable form used in diagnostics."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.CHAR:
            return f"'{chr(self.value)}'"
        if self.type == TokenType.ASSIGN:
            return "'='"
        if self.type in (TokenType.DEF, TokenType.MAIN, TokenType.RETURN):
            return f"'{self.type.name.lower()}'"
        return f"'{self.value}'"


# =============================================================================
# Character Source
# =============================================================================

class CharacterSource:
    """
    Forward-only character reader over a text stream.

    The source never seeks or rewinds. ``read()`` returns the empty
    string once the stream is exhausted, and keeps doing so.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._exhausted = False

    @classmethod
    def from_string(cls, text: str) -> "CharacterSource":
        return cls(io.StringIO(text))

    def read(self) -> str:
        """Return the next character, or '' at end of input."""
        if self._exhausted:
            return ""
        char = self._stream.read(1)
        if char == "":
            self._exhausted = True
        return char


# Longest prefix of a digits-and-dots run that strtod would accept
_DECIMAL_PREFIX = re.compile(r"\d*(?:\.\d*)?")


def convert_number(
    text: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> int:
    """
    Convert a run of digits and dots to an integer.

    The longest valid decimal prefix is read as a float and truncated
    toward zero. A run with no digits in its prefix converts to 0.

    Raises:
        NumericLiteralError: If the float intermediate overflows
    """
    prefix = _DECIMAL_PREFIX.match(text).group()
    if not any(c in string.digits for c in prefix):
        return 0
    value = float(prefix)
    if math.isinf(value):
        raise NumericLiteralError(text, location, source_line)
    return int(value)


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Pull-based scanner for toypython source.

    The scanner keeps exactly one character of lookahead between calls:
    the end of an identifier or number is only known after reading the
    character that follows it.

    Usage:
        scanner = Scanner(CharacterSource(stream), "prog.tp")
        token = scanner.next_token()

    Attributes:
        filename: Name of the source (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits

    # Characters of a numeric literal run
    NUMBER_CHARS = string.digits + "."

    def __init__(self, source: CharacterSource, filename: str = "<input>"):
        self._source = source
        self.filename = filename

        # Position of the lookahead character
        self._line = 1
        self._column = 0

        # Text of the current line read so far, for diagnostics
        self._line_chars: list[str] = []

        # Prime with a space so the first call simply skips it
        self._last_char = " "

    @classmethod
    def from_string(cls, text: str, filename: str = "<input>") -> "Scanner":
        return cls(CharacterSource.from_string(text), filename)

    def source_line(self, line: int) -> Optional[str]:
        """
        Return the text read so far on ``line``.

        Only the line under the lookahead is kept; earlier lines give None.
        """
        if line != self._line:
            return None
        return "".join(self._line_chars)

    def _read(self) -> str:
        """
        Advance the lookahead by one character.

        Raises:
            SourceEncodingError: If the stream cannot decode the next character
        """
        if self._last_char == "\n":
            self._line += 1
            self._column = 0
            self._line_chars = []
        try:
            char = self._source.read()
        except UnicodeDecodeError as e:
            location = SourceLocation(self.filename, self._line, self._column + 1)
            raise SourceEncodingError(e.encoding, e.reason, location) from e
        if char:
            self._column += 1
            if char not in "\r\n":
                self._line_chars.append(char)
        self._last_char = char
        return char

    def _make_token(
        self,
        token_type: TokenType,
        value: str | int | None,
        line: int,
        column: int,
    ) -> Token:
        return Token(token_type, value, line, column, self.filename)

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns:
            The next Token; EOF is returned at end of input and on every
            call after that.

        Raises:
            NumericLiteralError: If a numeric literal overflows
            SourceEncodingError: If the source cannot be decoded
        """
        while True:
            while self._last_char and self._last_char.isspace():
                self._read()

            if not self._last_char:
                return self._make_token(TokenType.EOF, None, self._line, self._column + 1)

            line, column = self._line, self._column
            char = self._last_char

            if char in self.IDENT_START:
                return self._scan_identifier(line, column)

            if char == "=":
                self._read()
                return self._make_token(TokenType.ASSIGN, None, line, column)

            if char in self.NUMBER_CHARS:
                return self._scan_number(line, column)

            if char == "#":
                while self._last_char and self._last_char not in "\n\r":
                    self._read()
                continue

            self._read()
            return self._make_token(TokenType.CHAR, ord(char), line, column)

    def tokenize(self) -> Iterator[Token]:
        """
        Yield tokens up to and including the first EOF.

        Raises:
            NumericLiteralError: If a numeric literal overflows
            SourceEncodingError: If the source cannot be decoded
        """
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _scan_identifier(self, line: int, column: int) -> Token:
        """Scan an identifier or keyword."""
        chars = [self._last_char]
        while self._read() and self._last_char in self.IDENT_CHARS:
            chars.append(self._last_char)

        name = "".join(chars)
        if name in KEYWORDS:
            return self._make_token(KEYWORDS[name], None, line, column)
        return self._make_token(TokenType.IDENTIFIER, name, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """Scan a run of digits and dots."""
        chars = [self._last_char]
        while self._read() and self._last_char in self.NUMBER_CHARS:
            chars.append(self._last_char)

        text = "".join(chars)
        value = convert_number(
            text,
            SourceLocation(self.filename, line, column),
            self.source_line(line),
        )
        return self._make_token(TokenType.NUMBER, value, line, column)


def scan_tokens(text: str, filename: str = "<input>") -> list[Token]:
    """Scan a complete string, returning every token through EOF."""
    return list(Scanner.from_string(text, filename).tokenize())
