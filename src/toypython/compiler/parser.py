"""
toypython Recursive Descent Parser
==================================

This module implements the parser for the toypython language. It pulls
tokens from the scanner one at a time (single-token lookahead, no
backtracking) and appends statement nodes to the top-level Block.

Grammar (EBNF)
--------------
program          ::= (statement ';'?)* EOF
statement        ::= NUMBER | identifier_expr | return_stmt
identifier_expr  ::= IDENTIFIER '=' (NUMBER | IDENTIFIER)
return_stmt      ::= 'return' (NUMBER | IDENTIFIER)

An identifier in statement position always begins an assignment; a bare
variable reference cannot stand alone as a statement. The keywords
``def`` and ``main`` are scanned but no production accepts them.

Error Handling
--------------
There is no error recovery. The first token that fits no production
raises UnexpectedTokenError and parsing stops.

Example Usage
-------------
>>> from toypython.compiler.parser import parse_source
>>> block = parse_source('x = 5; return x;')
>>> block.statements
[Assignment@1:1, Return@1:8]
"""

import logging

from toypython.errors import SourceLocation
from toypython.compiler.lexer import Scanner, Token, TokenType
from toypython.compiler.ast import (
    Assignment,
    Block,
    Expression,
    NumberLiteral,
    Return,
    Statement,
    VariableReference,
)
from toypython.compiler.errors import UnexpectedTokenError

logger = logging.getLogger(__name__)


class Parser:
    """
    Recursive descent parser for toypython.

    The parser owns the single token of lookahead. Every parse method
    starts with ``current`` on the first token of its production and
    leaves ``current`` on the first token after it.

    Usage:
        parser = Parser(Scanner.from_string(source))
        block = parser.parse()

    Attributes:
        scanner: Token source
        current: The lookahead token (None before the first advance)
    """

    def __init__(self, scanner: Scanner):
        self.scanner = scanner
        self.current: Token | None = None
        self.token_count = 0

    @property
    def filename(self) -> str:
        return self.scanner.filename

    def parse(self) -> Block:
        """
        Parse the whole input into the top-level Block.

        Returns:
            Block containing every top-level statement in program order

        Raises:
            ToySyntaxError: On the first syntax error
        """
        block = Block(location=SourceLocation(self.filename, 1, 1))
        self.advance()
        self.main_loop(block)
        logger.debug(f"Parsed {len(block)} statements from {self.token_count} tokens")
        return block

    def main_loop(self, block: Block) -> None:
        """
        Drive top-level parsing until end of input.

        Semicolons between statements are skipped; everything else
        starts a statement which is appended to ``block``.
        """
        while True:
            if self.current.type == TokenType.EOF:
                return
            if self.current.is_char(";"):
                self.advance()
                continue
            block.insert(self.parse_statement())

    # =========================================================================
    # Token Access
    # =========================================================================

    def advance(self) -> Token:
        """Pull the next token from the scanner into ``current``."""
        self.current = self.scanner.next_token()
        self.token_count += 1
        return self.current

    def _unexpected(self) -> UnexpectedTokenError:
        token = self.current
        return UnexpectedTokenError(
            token.describe(),
            token.location,
            source_line=self.scanner.source_line(token.line),
        )

    # =========================================================================
    # Productions
    # =========================================================================

    def parse_statement(self) -> Statement | Expression:
        """
        statement ::= NUMBER | identifier_expr | return_stmt
        """
        token_type = self.current.type
        if token_type == TokenType.NUMBER:
            return self.parse_number()
        if token_type == TokenType.IDENTIFIER:
            return self.parse_identifier_expr()
        if token_type == TokenType.RETURN:
            return self.parse_return()
        raise self._unexpected()

    def parse_number(self) -> NumberLiteral:
        """numberexpr ::= NUMBER"""
        token = self.current
        self.advance()
        return NumberLiteral(location=token.location, value=token.value)

    def parse_variable(self) -> VariableReference:
        """variable ::= IDENTIFIER"""
        token = self.current
        self.advance()
        return VariableReference(location=token.location, name=token.value)

    def parse_identifier_expr(self) -> Assignment:
        """
        identifier_expr ::= IDENTIFIER '=' (NUMBER | IDENTIFIER)
        """
        target = self.parse_variable()
        if self.current.type != TokenType.ASSIGN:
            raise self._unexpected()
        self.advance()
        value = self._parse_operand()
        return Assignment(location=target.location, target=target, value=value)

    def parse_return(self) -> Return:
        """
        return_stmt ::= 'return' (NUMBER | IDENTIFIER)
        """
        location = self.current.location
        self.advance()
        value = self._parse_operand()
        return Return(location=location, value=value)

    def _parse_operand(self) -> Expression:
        if self.current.type == TokenType.NUMBER:
            return self.parse_number()
        if self.current.type == TokenType.IDENTIFIER:
            return self.parse_variable()
        raise self._unexpected()


def parse_source(source: str, filename: str = "<input>") -> Block:
    """Parse a source string into a Block."""
    return Parser(Scanner.from_string(source, filename)).parse()
