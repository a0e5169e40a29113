"""
toypython Translator Main Module
================================

This module provides the main translator interface. It orchestrates one
complete translation:

    Characters -> Scan -> Parse -> Generate -> LLVM IR module

Usage
-----
Command line:
    $ toypyc prog.tp -o prog.ll

Programmatic:
    >>> from toypython.compiler import translate_source
    >>> print(translate_source('return 42;'))

Translation Pipeline
--------------------
1. **Scanning and parsing** (interleaved): the parser pulls tokens from
   the scanner and builds the top-level Block.
2. **Code generation**: a separate pass over the finished Block emits
   the ``main`` function into a fresh module.
3. **Verification** (optional): LLVM checks the finished module.

Error Handling
--------------
Translation stops at the first error. The error is kept in the error
list and re-raised wrapped in a TranslationError whose report is the
one diagnostic the caller prints.
Every translation builds its own scanner, parser, module, and generator,
so a Translator can be reused for any number of inputs.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO
import io
import logging
import os

from llvmlite import ir

from toypython.errors import ErrorCollector
from toypython.compiler.lexer import CharacterSource, Scanner
from toypython.compiler.parser import Parser
from toypython.compiler.ast import Block
from toypython.compiler.codegen import BlockContext, CodeGenerator, verify_module
from toypython.compiler.errors import (
    MissingReturnError,
    TranslationError,
    TranslatorError,
)

logger = logging.getLogger(__name__)


_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class TranslatorOptions:
    """
    Translator configuration options.

    Attributes:
        module_name: Name of the generated IR module. None means use the
                     input filename.
        function_name: Name of the implicit top-level function
        verify: Run LLVM verification on the finished module. A program
                without a return fails verification with MissingReturnError.
        trace_values: Log every generated statement value at DEBUG level
    """
    module_name: Optional[str] = None
    function_name: str = "main"
    verify: bool = False
    trace_values: bool = True

    @classmethod
    def from_env(cls) -> "TranslatorOptions":
        """
        Create TranslatorOptions from environment variables.

        Environment variables (all optional):
            TOYPY_MODULE_NAME: Module name override
            TOYPY_VERIFY: Enable verification ("1", "true", "yes", "on")
            TOYPY_TRACE: Enable value tracing (same values; others disable)
        """
        options = cls()

        if module_name := os.environ.get("TOYPY_MODULE_NAME"):
            options.module_name = module_name

        if verify := os.environ.get("TOYPY_VERIFY"):
            options.verify = verify.strip().lower() in _TRUE_VALUES

        if trace := os.environ.get("TOYPY_TRACE"):
            options.trace_values = trace.strip().lower() in _TRUE_VALUES

        return options


@dataclass
class TranslationResult:
    """
    Result of a translation.

    Attributes:
        filename: Source filename
        success: True if translation succeeded
        module: The generated IR module
        block: The parsed top-level block
        context: BlockContext of the generated function
        token_count: Number of tokens pulled by the parser
        has_return: True if the function ends with a return
        errors: Errors reported during translation
        warnings: Warning messages
    """
    filename: str = ""
    success: bool = False
    module: Optional[ir.Module] = None
    block: Optional[Block] = None
    context: Optional[BlockContext] = None
    token_count: int = 0
    has_return: bool = False
    errors: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    @property
    def ir(self) -> str:
        """Textual LLVM IR of the generated module."""
        return str(self.module) if self.module is not None else ""


class Translator:
    """
    toypython to LLVM IR translator.

    Example:
        translator = Translator()
        result = translator.translate_file("prog.tp")
        print(result.ir)

    Attributes:
        options: Translator configuration options
    """

    def __init__(self, options: Optional[TranslatorOptions] = None):
        self.options = options or TranslatorOptions()
        self._errors = ErrorCollector()

    def translate_stream(self, stream: TextIO, filename: str = "<input>") -> TranslationResult:
        """
        Translate source read from a text stream.

        Args:
            stream: Text stream positioned at the start of the program
            filename: Source filename for error messages

        Returns:
            TranslationResult with the generated module

        Raises:
            TranslationError: On the first error
        """
        self._errors.clear()
        result = TranslationResult(filename=filename)

        try:
            parser = Parser(Scanner(CharacterSource(stream), filename))
            result.block = parser.parse()
            result.token_count = parser.token_count

            generator = CodeGenerator(
                module_name=self.options.module_name or filename,
                function_name=self.options.function_name,
                trace_values=self.options.trace_values,
            )
            result.module = generator.generate(result.block)
            result.context = generator.context
            result.has_return = generator.has_return

            if not result.has_return:
                self._errors.add_warning(
                    f"function '{self.options.function_name}' has no return statement"
                )
                logger.warning(
                    f"{filename}: function '{self.options.function_name}' has no return statement"
                )

            if self.options.verify:
                if not result.has_return:
                    raise MissingReturnError(self.options.function_name)
                verify_module(result.module)

            result.success = True

        except TranslatorError as e:
            logger.debug(f"Translation of {filename} failed: {e.message}")
            self._errors.add(e)

        result.errors = list(self._errors.errors)
        result.warnings = list(self._errors.warnings)

        if self._errors.has_errors():
            raise TranslationError(self._errors.report(), result.errors)

        return result

    def translate_source(self, source: str, filename: str = "<input>") -> TranslationResult:
        """Translate a source string."""
        return self.translate_stream(io.StringIO(source), filename)

    def translate_file(self, filepath: str | Path) -> TranslationResult:
        """
        Translate a source file.

        Raises:
            TranslationError: On the first error
            FileNotFoundError: If the source file doesn't exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        with path.open(encoding="utf-8") as stream:
            return self.translate_stream(stream, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def translate_source(source: str, filename: str = "<input>") -> str:
    """
    Translate toypython source to textual LLVM IR.

    Raises:
        TranslationError: If translation fails

    Example:
        >>> ir_text = translate_source('x = 5; return x;')
    """
    return Translator().translate_source(source, filename).ir


def translate_file(filepath: str, output_path: Optional[str] = None) -> str:
    """
    Translate a toypython file to textual LLVM IR.

    Args:
        filepath: Path to the source file
        output_path: Optional path to write the IR to

    Raises:
        TranslationError: If translation fails
        FileNotFoundError: If source file not found
    """
    result = Translator().translate_file(filepath)

    if output_path:
        Path(output_path).write_text(result.ir, encoding="utf-8")

    return result.ir
