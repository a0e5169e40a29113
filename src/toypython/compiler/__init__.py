"""
toypython Translator
====================

This package translates the toypython language into LLVM IR.

toypython programs are a flat list of statements that all run inside one
implicit ``main`` function returning a 32-bit integer:

    # comments run to end of line
    y = 3;
    x = y;
    return x;

Pipeline
--------
    Characters → Scanner → Parser → AST → Code Generator → LLVM IR module

Scanning is pull-based: the parser asks the scanner for one token at a
time. Code generation is a separate pass over the finished AST.

Usage
-----
>>> from toypython.compiler import translate_source
>>> print(translate_source('return 42;'))

Language Subset
---------------
Supported:
- Integer literals (fractional digits are truncated)
- Assignment of a literal or another variable
- return of a literal or a variable

Not supported:
- Operators and precedence
- Control flow
- Function definitions and calls (``def`` and ``main`` are reserved)
"""

from toypython.compiler.translator import (
    Translator,
    TranslatorOptions,
    TranslationResult,
    translate_source,
    translate_file,
)
from toypython.compiler.errors import (
    TranslatorError,
    ToySyntaxError,
    UnexpectedTokenError,
    NumericLiteralError,
    SourceEncodingError,
    CodeGenError,
    UndefinedVariableError,
    UnreachableCodeError,
    MissingReturnError,
    IRVerificationError,
    TranslationError,
)
from toypython.compiler.lexer import Scanner, CharacterSource, Token, TokenType, scan_tokens
from toypython.compiler.parser import Parser, parse_source
from toypython.compiler.codegen import CodeGenerator, BlockContext
from toypython.compiler.ast import (
    ASTNode,
    ASTPrinter,
    Block,
    NumberLiteral,
    VariableReference,
    Assignment,
    Return,
)

__all__ = [
    # Main API
    "Translator",
    "TranslatorOptions",
    "TranslationResult",
    "translate_source",
    "translate_file",
    # Errors
    "TranslatorError",
    "ToySyntaxError",
    "UnexpectedTokenError",
    "NumericLiteralError",
    "SourceEncodingError",
    "CodeGenError",
    "UndefinedVariableError",
    "UnreachableCodeError",
    "MissingReturnError",
    "IRVerificationError",
    "TranslationError",
    # Scanner
    "Scanner",
    "CharacterSource",
    "Token",
    "TokenType",
    "scan_tokens",
    # Parser
    "Parser",
    "parse_source",
    # Code Generator
    "CodeGenerator",
    "BlockContext",
    # AST Nodes
    "ASTNode",
    "ASTPrinter",
    "Block",
    "NumberLiteral",
    "VariableReference",
    "Assignment",
    "Return",
]
