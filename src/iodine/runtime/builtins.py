"""
Built-in function registry for the Iodine interpreter.

Builtins receive their argument nodes unevaluated together with the
interpreter state, and evaluate them as needed.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, TYPE_CHECKING

import numpy as np

from .values import Value, int32_val, NULL_VALUE
from .interpreter import evaluate
from ..types import DataType
from ..errors import error_arity, error_argument_type, error_invalid_operation

if TYPE_CHECKING:
    from ..ast import Node
    from .context import InterpreterState

logger = logging.getLogger(__name__)


@dataclass
class BuiltinFunction:
    """
    A built-in function with its implementation.
    """
    name: str
    implementation: Callable[..., Value]
    doc: str = ""


def _single_argument(name: str, args: Sequence["Node"], state: "InterpreterState") -> Value:
    if len(args) != 1:
        raise error_arity(name, 1, len(args))
    return evaluate(args[0], state)


def sqrt(args: Sequence["Node"], state: "InterpreterState") -> Value:
    """
    Square root of a number.

    Floats keep their precision; an Int32 argument yields the root
    rounded to the nearest integer.
    """
    x = _single_argument("sqrt", args, state)
    if x.type == DataType.FLOAT32:
        with np.errstate(invalid="ignore"):
            return Value(DataType.FLOAT32, np.sqrt(x.data))
    if x.type == DataType.FLOAT64:
        with np.errstate(invalid="ignore"):
            return Value(DataType.FLOAT64, np.sqrt(x.data))
    if x.type == DataType.INT32:
        if x.data < 0:
            raise error_invalid_operation("sqrt of a negative number", str(x.type))
        return int32_val(round(math.sqrt(int(x.data))))
    raise error_argument_type("sqrt", str(x.type))


def println(args: Sequence["Node"], state: "InterpreterState") -> Value:
    """Print the display text of a value followed by a newline."""
    x = _single_argument("println", args, state)
    print(x, file=state.output)
    return NULL_VALUE


DEFAULT_BUILTINS: List[BuiltinFunction] = [
    BuiltinFunction("sqrt", sqrt, "sqrt(x): square root of a number"),
    BuiltinFunction("println", println, "println(x): print a value and a newline"),
]


def register_builtins(state: "InterpreterState") -> None:
    """Install the default builtins into the state's function table."""
    for builtin in DEFAULT_BUILTINS:
        state.register(builtin.name, builtin.implementation, builtin.doc)
    logger.debug("registered %d builtin(s)", len(DEFAULT_BUILTINS))
