"""
toypython Abstract Syntax Tree (AST) Definitions
================================================

This module defines the AST node types built by the parser and consumed
by the code generator.

Node Hierarchy
--------------
ASTNode (base)
├── Block - the implicit top-level function body
├── Statements
│   ├── Assignment - binds a variable to a value
│   └── Return - returns a value from the function
└── Expressions
    ├── NumberLiteral - integer constant
    └── VariableReference - use of a variable

The node set is closed: code generation dispatches through ASTVisitor
and treats any other class as an internal error.

Design Notes
------------
- All nodes are dataclasses storing their source location
- Each node is owned by exactly one parent; there is no sharing
- A NumberLiteral may also appear as a statement on its own
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from toypython.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Expression(ASTNode):
    """Base class for nodes that evaluate to a value."""
    pass


@dataclass
class Statement(ASTNode):
    """Base class for nodes that perform an action."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass
class NumberLiteral(Expression):
    """
    Integer literal expression.

    Attributes:
        value: The integer value (before 32-bit wrapping)
    """
    value: int = 0


@dataclass
class VariableReference(Expression):
    """
    A use of a variable binding, not a declaration.

    Attributes:
        name: The variable name
    """
    name: str = ""


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass
class Assignment(Statement):
    """
    Assignment statement: ``target = value``.

    Attributes:
        target: The variable being bound or rebound
        value: The expression whose result is bound
    """
    target: Optional[VariableReference] = None
    value: Optional[Expression] = None


@dataclass
class Return(Statement):
    """
    Return statement: ``return value``.

    Attributes:
        value: The expression returned from the function
    """
    value: Optional[Expression] = None


# =============================================================================
# Top-Level Block
# =============================================================================

@dataclass
class Block(ASTNode):
    """
    The implicit top-level function body.

    Statements are kept in program order, which is also execution order.
    Exactly one Block exists per translation.

    Attributes:
        statements: Top-level statement nodes (Assignment, Return, or a
                    bare NumberLiteral)
    """
    statements: list[ASTNode] = field(default_factory=list)

    def insert(self, node: ASTNode) -> None:
        """Append a statement to the end of the block."""
        self.statements.append(node)

    def __len__(self) -> int:
        return len(self.statements)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they handle.

    Usage:
        class MyVisitor(ASTVisitor):
            def visit_Return(self, node):
                ...

        MyVisitor().visit(block)
    """

    def visit(self, node: ASTNode) -> Any:
        """Visit a node by dispatching to ``visit_<ClassName>``."""
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """
        Default visit method for unhandled node types.

        Visits all children of the node.
        """
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, list):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)

    def visit_Block(self, node: Block): return self.generic_visit(node)
    def visit_Assignment(self, node: Assignment): return self.generic_visit(node)
    def visit_Return(self, node: Return): return self.generic_visit(node)
    def visit_NumberLiteral(self, node: NumberLiteral): return self.generic_visit(node)
    def visit_VariableReference(self, node: VariableReference): return self.generic_visit(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(block))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_Block(self, node: Block):
        self._emit("Block main")
        self.indent_level += 1
        for stmt in node.statements:
            self.visit(stmt)
        self.indent_level -= 1

    def visit_Assignment(self, node: Assignment):
        self._emit(f"Assign: {node.target.name} = {self._expr_str(node.value)}")

    def visit_Return(self, node: Return):
        self._emit(f"Return {self._expr_str(node.value)}")

    def visit_NumberLiteral(self, node: NumberLiteral):
        self._emit(f"Expr: {node.value}")

    def visit_VariableReference(self, node: VariableReference):
        self._emit(f"Expr: {node.name}")

    def _expr_str(self, expr: Expression) -> str:
        if isinstance(expr, NumberLiteral):
            return str(expr.value)
        if isinstance(expr, VariableReference):
            return expr.name
        return f"<{type(expr).__name__}>"
