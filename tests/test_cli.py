# =============================================================================
# test_cli.py - toypyc Command-Line Tests
# =============================================================================
# Tests for the toypyc CLI using click's CliRunner.
#
# Test coverage includes:
#   - Default and explicit output paths
#   - IR, token, and AST printing
#   - Exit codes for translation errors
#   - Environment-provided options
# =============================================================================

import pytest
from click.testing import CliRunner

from toypython import __version__
from toypython.cli.errors import ExitCode
from toypython.cli.toypyc import default_output_path, main


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def program(tmp_path):
    """A small valid program on disk."""
    path = tmp_path / "prog.tp"
    path.write_text("# demo\nx = 5;\nreturn x;\n")
    return path


# =============================================================================
# Translation Tests
# =============================================================================

class TestTranslate:
    """Test writing IR files."""

    def test_default_output_path(self, runner, program):
        result = runner.invoke(main, [str(program)])
        assert result.exit_code == ExitCode.SUCCESS
        output = program.with_name("prog.tp.Output")
        assert output.exists()
        assert "ret i32 5" in output.read_text()
        assert "Translated" in result.output

    def test_explicit_output(self, runner, program, tmp_path):
        output = tmp_path / "prog.ll"
        result = runner.invoke(main, [str(program), "-o", str(output)])
        assert result.exit_code == ExitCode.SUCCESS
        assert 'define i32 @"main"()' in output.read_text()

    def test_module_name(self, runner, program):
        result = runner.invoke(main, [str(program), "--print-ir", "--module-name", "demo"])
        assert result.exit_code == ExitCode.SUCCESS
        assert '; ModuleID = "demo"' in result.output

    def test_module_name_from_env(self, runner, program, monkeypatch):
        monkeypatch.setenv("TOYPY_MODULE_NAME", "fromenv")
        result = runner.invoke(main, [str(program), "--print-ir"])
        assert '; ModuleID = "fromenv"' in result.output

    def test_print_ir(self, runner, program):
        result = runner.invoke(main, [str(program), "--print-ir"])
        assert result.exit_code == ExitCode.SUCCESS
        assert "ret i32 5" in result.output
        assert not program.with_name("prog.tp.Output").exists()

    def test_verify(self, runner, program):
        result = runner.invoke(main, [str(program), "--verify", "--print-ir"])
        assert result.exit_code == ExitCode.SUCCESS

    def test_default_output_path_helper(self, tmp_path):
        assert default_output_path(tmp_path / "a.tp") == tmp_path / "a.tp.Output"


# =============================================================================
# Debug Output Tests
# =============================================================================

class TestDebugOutput:
    """Test --tokens and --ast."""

    def test_tokens(self, runner, tmp_path):
        path = tmp_path / "t.tp"
        path.write_text("return 42;")
        result = runner.invoke(main, [str(path), "--tokens"])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output.splitlines() == [
            "Token(RETURN, 1:1)",
            "Token(NUMBER, 42, 1:8)",
            "Token(CHAR, ';', 1:10)",
            "Token(EOF, 1:11)",
        ]

    def test_ast(self, runner, program):
        result = runner.invoke(main, [str(program), "--ast"])
        assert result.exit_code == ExitCode.SUCCESS
        assert "Block main" in result.output
        assert "Assign: x = 5" in result.output
        assert "Return x" in result.output


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """Test exit codes and diagnostics."""

    def test_syntax_error(self, runner, tmp_path):
        path = tmp_path / "bad.tp"
        path.write_text("def main(): return 1\n")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "unknown token when expecting an expression" in result.output
        assert "1 error, 0 warnings" in result.output
        assert not path.with_name("bad.tp.Output").exists()

    def test_verify_missing_return(self, runner, tmp_path):
        path = tmp_path / "noret.tp"
        path.write_text("x = 1;")
        result = runner.invoke(main, [str(path), "--verify"])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "does not return a value" in result.output

    def test_ast_syntax_error(self, runner, tmp_path):
        path = tmp_path / "bad.tp"
        path.write_text("main")
        result = runner.invoke(main, [str(path), "--ast"])
        assert result.exit_code == ExitCode.BUILD_ERROR

    def test_undecodable_input(self, runner, tmp_path):
        path = tmp_path / "binary.tp"
        path.write_bytes(b"x = 5; \xff\xfe return x;")
        result = runner.invoke(main, [str(path), "--print-ir"])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "not valid utf-8" in result.output
        assert "Internal error" not in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.tp")])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_star_import_exposes_command_module(self):
        namespace = {}
        exec("from toypython.cli import *", namespace)
        assert namespace["toypyc"].main is main

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
