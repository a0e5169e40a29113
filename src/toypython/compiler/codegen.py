"""
LLVM IR Code Generator for toypython
====================================

This module generates LLVM IR from the toypython AST using
``llvmlite.ir``. The whole program compiles into one function,
``i32 main()``, with exactly one basic block named ``entry``.

Code Generation Strategy
------------------------
| Node              | Emitted IR                                      |
|-------------------|-------------------------------------------------|
| NumberLiteral     | ``i32`` constant (wrapped to 32 bits)           |
| VariableReference | value recorded by the last assignment to it     |
| Assignment        | ``alloca i32`` for the target, ``store`` value  |
| Return            | ``ret i32 <value>``                             |

Assignment evaluates its right-hand side first, records the result in
the BlockContext under the target's name, then allocates fresh storage
for the target and stores into it. Storage is allocated on every
assignment; a name assigned twice gets two slots. Reads never touch
storage: they resolve through the BlockContext mapping.

Generator States
----------------
UNINITIALIZED -> EMITTING, once, at the start of ``generate()``. The
transition creates the function and its entry block, positions the
builder, and runs the structural verifier on the still-empty function.

Usage
-----
>>> from toypython.compiler.parser import parse_source
>>> from toypython.compiler.codegen import CodeGenerator
>>> gen = CodeGenerator("demo")
>>> module = gen.generate(parse_source('return 42;'))
>>> 'ret i32 42' in str(module)
True
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional
import logging

from llvmlite import binding, ir
from llvmlite.ir.instructions import AllocaInstr, Instruction, Terminator

from toypython.compiler.ast import (
    ASTNode,
    ASTVisitor,
    Assignment,
    Block,
    NumberLiteral,
    Return,
    VariableReference,
)
from toypython.compiler.errors import (
    CodeGenError,
    IRVerificationError,
    UndefinedVariableError,
    UnreachableCodeError,
)

logger = logging.getLogger(__name__)


# The only value type in the language
INT32 = ir.IntType(32)


def wrap_int32(value: int) -> int:
    """Wrap an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


# =============================================================================
# Generation State
# =============================================================================

@dataclass
class BlockContext:
    """
    Mutable code-generation state for one function body.

    Attributes:
        locals: Variable name -> value most recently assigned to it
        current_block: The basic block receiving emitted instructions
    """
    locals: dict[str, ir.Value] = field(default_factory=dict)
    current_block: Optional[ir.Block] = None


class GeneratorState(Enum):
    UNINITIALIZED = auto()
    EMITTING = auto()


# =============================================================================
# Verification
# =============================================================================

def verify_function(function: ir.Function) -> list[str]:
    """
    Run structural sanity checks on a function.

    Returns:
        A list of problems found; empty if the function is well formed
    """
    problems = []
    if not function.blocks:
        problems.append(f"function '{function.name}' has no basic blocks")
    for block in function.blocks:
        if any(isinstance(instr, Terminator) for instr in block.instructions[:-1]):
            problems.append(
                f"block '{block.name}' in function '{function.name}' "
                f"has instructions after its terminator"
            )
        if not block.is_terminated:
            problems.append(
                f"block '{block.name}' in function '{function.name}' has no terminator"
            )
    return problems


def verify_module(module: ir.Module) -> None:
    """
    Verify a finished module with LLVM.

    Raises:
        IRVerificationError: If LLVM cannot parse or verify the module
    """
    try:
        parsed = binding.parse_assembly(str(module))
        parsed.verify()
    except RuntimeError as e:
        raise IRVerificationError(f"LLVM verification failed: {e}") from e


# =============================================================================
# Code Generator Class
# =============================================================================

class CodeGenerator(ASTVisitor):
    """
    Generates an LLVM IR module from the top-level Block.

    A generator is single-use: it owns one module and generates one
    function into it.

    Attributes:
        module: The IR module being filled
        function_name: Name of the generated function
        trace_values: Log each statement's resulting IR value at DEBUG
        context: The BlockContext of the generated function
    """

    def __init__(
        self,
        module_name: str = "<input>",
        function_name: str = "main",
        trace_values: bool = True,
    ):
        self.module = ir.Module(name=module_name)
        self.function_name = function_name
        self.trace_values = trace_values

        self.state = GeneratorState.UNINITIALIZED
        self.function: Optional[ir.Function] = None
        self.builder: Optional[ir.IRBuilder] = None
        self.context = BlockContext()

    # =========================================================================
    # Entry Point
    # =========================================================================

    def generate(self, block: Block) -> ir.Module:
        """
        Generate the function body for ``block``.

        Args:
            block: The parsed top-level block

        Returns:
            The IR module containing the generated function

        Raises:
            CodeGenError: On the first code generation failure
        """
        if self.state != GeneratorState.UNINITIALIZED:
            raise CodeGenError(
                f"function '{self.function_name}' has already been generated",
                location=block.location,
            )
        self._begin_function()

        for stmt in block.statements:
            if self.context.current_block.is_terminated:
                raise UnreachableCodeError(stmt.location)
            value = self.visit(stmt)
            if self.trace_values:
                logger.debug(f"{value}")

        return self.module

    def _begin_function(self) -> None:
        """Create the function and entry block, and position the builder."""
        fnty = ir.FunctionType(INT32, [])
        self.function = ir.Function(self.module, fnty, name=self.function_name)

        self.context.current_block = self.function.append_basic_block(name="entry")
        self.builder = ir.IRBuilder(self.context.current_block)
        self.state = GeneratorState.EMITTING

        # Checks the function before any instruction is emitted
        for problem in verify_function(self.function):
            logger.debug(f"verifier: {problem}")

    @property
    def has_return(self) -> bool:
        """True once the entry block has been terminated by a return."""
        block = self.context.current_block
        return block is not None and block.is_terminated

    # =========================================================================
    # Node Visitors
    # =========================================================================

    def generic_visit(self, node: ASTNode) -> None:
        raise CodeGenError(
            f"cannot generate code for {type(node).__name__}",
            location=node.location,
        )

    def visit_NumberLiteral(self, node: NumberLiteral) -> ir.Constant:
        return ir.Constant(INT32, wrap_int32(node.value))

    def visit_VariableReference(self, node: VariableReference) -> ir.Value:
        try:
            return self.context.locals[node.name]
        except KeyError:
            raise UndefinedVariableError(
                node.name,
                node.location,
                known_names=list(self.context.locals),
            ) from None

    def visit_Assignment(self, node: Assignment) -> Instruction:
        value = self.visit(node.value)
        self.context.locals[node.target.name] = value
        storage = self._allocate_storage(node.target)
        return self.builder.store(value, storage)

    def visit_Return(self, node: Return) -> Instruction:
        value = self.visit(node.value)
        return self.builder.ret(value)

    def _allocate_storage(self, target: VariableReference) -> AllocaInstr:
        """Allocate a fresh stack slot for ``target`` in the current block."""
        return self.builder.alloca(INT32, name=target.name)
