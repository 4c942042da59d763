"""
Execution state for the Iodine interpreter.

All mutable interpreter state lives in an InterpreterState that is
passed explicitly to every evaluation call. There is a single global
variable table; blocks do not open scopes.
"""

import sys
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, TextIO

from .values import Value
from ..types import DataType


@dataclass
class Variable:
    """
    A declared variable.

    `declared_type` is fixed at declaration; reassignment must supply a
    value of exactly this type.
    """
    name: str
    declared_type: DataType
    value: Value


@dataclass
class Function:
    """A callable registered in the function table."""
    name: str
    is_builtin: bool
    implementation: Callable[..., Value]
    doc: str = ""


@dataclass
class InterpreterState:
    """
    The variable table, the function table and the output stream used by
    println.

    Usage:
        state = create_state()
        state.set_variable(Variable("x", DataType.INT32, int32_val(1)))
        state.get_variable("x").value
    """
    variables: Dict[str, Variable] = field(default_factory=dict)
    functions: Dict[str, Function] = field(default_factory=dict)
    output: TextIO = field(default_factory=lambda: sys.stdout)

    def get_variable(self, name: str) -> Optional[Variable]:
        """Look up a variable by name."""
        return self.variables.get(name)

    def set_variable(self, variable: Variable) -> None:
        """Bind a variable, replacing any previous binding of the name."""
        self.variables[variable.name] = variable

    def has_variable(self, name: str) -> bool:
        return name in self.variables

    def get_function(self, name: str) -> Optional[Function]:
        """Look up a function by name."""
        return self.functions.get(name)

    def register(self, name: str, implementation: Callable[..., Value],
                 doc: str = "", is_builtin: bool = True) -> Function:
        """Register (or replace) a function under the given name."""
        func = Function(name, is_builtin, implementation, doc)
        self.functions[name] = func
        return func


def create_state(register_defaults: bool = True,
                 output: Optional[TextIO] = None) -> InterpreterState:
    """
    Create a fresh interpreter state.

    Args:
        register_defaults: Install the default builtins (sqrt, println)
        output: Stream written by println (defaults to sys.stdout)
    """
    state = InterpreterState(output=output if output is not None else sys.stdout)
    if register_defaults:
        from .builtins import register_builtins
        register_builtins(state)
    return state
