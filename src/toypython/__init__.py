"""
toypython - A Tiny Source-to-LLVM-IR Translator
===============================================

toypython reads a minimal Python-flavoured language and emits an LLVM IR
module that can be handed to ``llc`` or any other LLVM backend.

Main Components
---------------
- **compiler**: scanner, parser, AST, and LLVM IR code generator
- **cli**: the ``toypyc`` command-line tool

Quick Start
-----------
    >>> from toypython import Translator
    >>> result = Translator().translate_source('x = 5; return x;')
    >>> print(result.ir)

Or use the command-line tool:
    $ toypyc prog.tp            # writes prog.tp.Output
"""

__version__ = "1.0.0"

from toypython.errors import ToyPythonError, SourceLocation
from toypython.compiler import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    TranslationError,
    translate_source,
    translate_file,
)

__all__ = [
    "__version__",
    "ToyPythonError",
    "SourceLocation",
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "TranslationError",
    "translate_source",
    "translate_file",
]
