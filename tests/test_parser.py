# =============================================================================
# test_parser.py - Parser Unit Tests
# =============================================================================
# Tests for the toypython recursive descent parser.
#
# Test coverage includes:
#   - Number, assignment, and return statements
#   - Semicolon handling between statements
#   - Statement locations
#   - Unexpected token errors (no recovery)
# =============================================================================

import pytest

from toypython.compiler.ast import (
    ASTPrinter,
    Assignment,
    NumberLiteral,
    Return,
    VariableReference,
)
from toypython.compiler.errors import ToySyntaxError, UnexpectedTokenError
from toypython.compiler.lexer import Scanner
from toypython.compiler.parser import Parser, parse_source


# =============================================================================
# Statement Tests
# =============================================================================

class TestStatements:
    """Test parsing of each statement form."""

    def test_empty_program(self):
        block = parse_source("")
        assert len(block) == 0

    def test_semicolons_only(self):
        """Stray semicolons are skipped."""
        block = parse_source(";;;")
        assert len(block) == 0

    def test_number_statement(self):
        block = parse_source("42;")
        assert len(block) == 1
        stmt = block.statements[0]
        assert isinstance(stmt, NumberLiteral)
        assert stmt.value == 42

    def test_assignment_of_number(self):
        block = parse_source("x = 5;")
        stmt = block.statements[0]
        assert isinstance(stmt, Assignment)
        assert stmt.target.name == "x"
        assert isinstance(stmt.value, NumberLiteral)
        assert stmt.value.value == 5

    def test_assignment_of_variable(self):
        block = parse_source("x = y;")
        stmt = block.statements[0]
        assert isinstance(stmt, Assignment)
        assert isinstance(stmt.value, VariableReference)
        assert stmt.value.name == "y"

    def test_return_number(self):
        block = parse_source("return 42;")
        stmt = block.statements[0]
        assert isinstance(stmt, Return)
        assert stmt.value.value == 42

    def test_return_variable(self):
        block = parse_source("return x")
        stmt = block.statements[0]
        assert isinstance(stmt, Return)
        assert isinstance(stmt.value, VariableReference)
        assert stmt.value.name == "x"

    def test_statements_in_order(self):
        block = parse_source("x = 5; y = x; return y;")
        assert [type(s) for s in block.statements] == [Assignment, Assignment, Return]

    def test_semicolons_optional(self):
        """Statements may follow each other without a separator."""
        block = parse_source("x = 5 return x")
        assert [type(s) for s in block.statements] == [Assignment, Return]

    def test_comments_ignored(self):
        block = parse_source("# set up\nx = 1; # one\nreturn x;")
        assert len(block) == 2


# =============================================================================
# Location Tests
# =============================================================================

class TestLocations:
    """Test source locations recorded on nodes."""

    def test_statement_locations(self):
        block = parse_source("x = 5;\nreturn x;", "prog.tp")
        assign, ret = block.statements
        assert str(assign.location) == "prog.tp:1:1"
        assert str(ret.location) == "prog.tp:2:1"

    def test_operand_location(self):
        block = parse_source("return 42;")
        assert block.statements[0].value.location.column == 8

    def test_node_repr(self):
        block = parse_source("x = 5; return x;")
        assert repr(block.statements) == "[Assignment@1:1, Return@1:8]"


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Test that unexpected tokens stop parsing with a single error."""

    @pytest.mark.parametrize("source", ["def", "main", "def main(): return 1"])
    def test_keywords_rejected(self, source):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source(source)
        assert "unknown token when expecting an expression" in str(exc_info.value)

    def test_found_token_described(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("def")
        assert exc_info.value.found == "'def'"

    def test_bare_identifier_rejected(self):
        """An identifier must be followed by '='."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x;")
        assert exc_info.value.found == "';'"

    def test_missing_assignment_value(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source("x = ;")

    def test_return_without_value(self):
        with pytest.raises(UnexpectedTokenError):
            parse_source("return;")

    def test_return_at_end_of_input(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("return")
        assert exc_info.value.found == "end of input"

    def test_error_location(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = 1;\n  def", "prog.tp")
        assert str(exc_info.value).startswith("prog.tp:2:3: error:")

    def test_error_shows_source_line(self):
        """The offending line is shown with a caret under the token."""
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = 1; def")
        lines = str(exc_info.value).splitlines()
        assert lines[1] == "    x = 1; def"
        assert lines[2] == " " * 11 + "^"

    def test_source_line_is_current_line_only(self):
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_source("x = 1;\n  def")
        error = exc_info.value
        assert error.source_line == "  def"
        assert str(error).splitlines()[2] == "      ^"

    def test_is_syntax_error(self):
        with pytest.raises(ToySyntaxError):
            parse_source("(")

    def test_stops_at_first_error(self):
        """Later input is never scanned once a statement fails."""
        parser = Parser(Scanner.from_string("def x = 1; return x;"))
        with pytest.raises(UnexpectedTokenError):
            parser.parse()
        assert parser.token_count == 1


# =============================================================================
# AST Printer Tests
# =============================================================================

class TestASTPrinter:
    """Test the debugging printer."""

    def test_print_block(self):
        block = parse_source("x = 5; 7; return x;")
        text = ASTPrinter().print(block)
        assert text.splitlines() == [
            "Block main",
            "  Assign: x = 5",
            "  Expr: 7",
            "  Return x",
        ]

    def test_print_empty_block(self):
        assert ASTPrinter().print(parse_source("")) == "Block main"
