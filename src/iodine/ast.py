"""
Abstract Syntax Tree (AST) node definitions for Iodine.

The node set is closed: every parsed statement is one of the node
classes below (see ``Node``). Nodes are frozen; the parser builds new
nodes instead of re-parenting existing ones.

There is no separate statement category. VarAssignment and If are
recognized by the evaluator and produce Null; every other node produces
a value.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional, Tuple, Union, TYPE_CHECKING

from .types import DataType

if TYPE_CHECKING:
    from .runtime.values import Value


class ArithmeticOp(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class UnaryOperation(Enum):
    PLUS = "+"
    MINUS = "-"


class ComparisonOp(Enum):
    EQUAL = "=="


# =============================================================================
# Nodes
# =============================================================================

@dataclass(frozen=True)
class AstNode:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class ConstVal(AstNode):
    """A literal value (number, boolean or string)."""
    value: Value


@dataclass(frozen=True)
class Arithmetic(AstNode):
    """A binary arithmetic operation (e.g., a + b)."""
    op: ArithmeticOp
    left: Node
    right: Node


@dataclass(frozen=True)
class UnaryOp(AstNode):
    """A prefix sign operation (e.g., -n)."""
    op: UnaryOperation
    operand: Node


@dataclass(frozen=True)
class VarAssignment(AstNode):
    """
    A declaration (``f64 x = 1``) or reassignment (``x = 2``).

    ``declared_type`` is set only for declarations.
    """
    name: str
    is_declaration: bool
    value: Node
    declared_type: Optional[DataType] = None


@dataclass(frozen=True)
class VariableReference(AstNode):
    """A variable name reference."""
    name: str


@dataclass(frozen=True)
class FunctionCall(AstNode):
    """A call to a registered function. Arguments stay unevaluated."""
    name: str
    args: Tuple[Node, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Comparison(AstNode):
    """An equality comparison (e.g., a == b)."""
    op: ComparisonOp
    lhs: Node
    rhs: Node


@dataclass(frozen=True)
class If(AstNode):
    """A conditional block. There is no else branch."""
    condition: Node
    body: Tuple[Node, ...] = field(default_factory=tuple)


Node = Union[
    ConstVal,
    Arithmetic,
    UnaryOp,
    VarAssignment,
    VariableReference,
    FunctionCall,
    Comparison,
    If,
]


# =============================================================================
# Debug printing
# =============================================================================

def _format_lines(node: AstNode, indent: int, lines: list) -> None:
    pad = "  " * indent
    lines.append(f"{pad}Node type: {node.__class__.__name__}")
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, AstNode):
            lines.append(f"{pad}{f.name}:")
            _format_lines(value, indent + 1, lines)
        elif isinstance(value, tuple):
            lines.append(f"{pad}{f.name}: [")
            for item in value:
                _format_lines(item, indent + 1, lines)
            lines.append(f"{pad}]")
        elif isinstance(value, Enum):
            lines.append(f"{pad}{f.name}: {value.name}")
        elif value is not None:
            lines.append(f"{pad}{f.name}: {value!s}")


def format_ast(node: AstNode) -> str:
    """Render an AST node as an indented tree, one field per line."""
    lines: list = []
    _format_lines(node, 0, lines)
    return "\n".join(lines)


def print_ast(node: AstNode) -> None:
    """Print an AST node for debugging."""
    print(format_ast(node))
