"""
Runtime values for the Iodine interpreter.

A Value is a tagged scalar or string. Numeric payloads are numpy
scalars so that Int32 arithmetic wraps like a 32-bit machine integer
and F32 arithmetic rounds to single precision.

Binary arithmetic between differently typed numbers first converts both
sides to the promoted type (see ``iodine.types.promote``) and then
combines them in that type.
"""

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from ..types import (
    DataType, NUMPY_TYPES, is_number_type, promote,
)
from ..errors import (
    error_conversion,
    error_comparison_types,
    error_invalid_operation,
    error_division_by_zero,
)

_INT32_SPAN = 2 ** 32
_INT32_MIN = -(2 ** 31)


@dataclass(frozen=True)
class Value:
    """
    A runtime value with its type tag.

    The `data` field holds the payload (numpy scalar, bool, str or None).
    """
    type: DataType
    data: Any = None

    def __repr__(self) -> str:
        return f"Value({self.type}, {self.data!r})"

    def __str__(self) -> str:
        return to_display_string(self)

    @property
    def is_null(self) -> bool:
        return self.type == DataType.NULL


# Convenience constructors

def int32_val(n: int) -> Value:
    """Create an Int32 value, wrapping out-of-range integers."""
    wrapped = (int(n) - _INT32_MIN) % _INT32_SPAN + _INT32_MIN
    return Value(DataType.INT32, np.int32(wrapped))


def float32_val(x: float) -> Value:
    """Create a single precision value."""
    with np.errstate(over="ignore"):
        return Value(DataType.FLOAT32, np.float32(x))


def float64_val(x: float) -> Value:
    """Create a double precision value."""
    return Value(DataType.FLOAT64, np.float64(x))


def bool_val(b: bool) -> Value:
    """Create a boolean value."""
    return Value(DataType.BOOLEAN, bool(b))


def string_val(s: str) -> Value:
    """Create a string value."""
    return Value(DataType.CONST_STRING, str(s))


NULL_VALUE = Value(DataType.NULL, None)


def null_val() -> Value:
    """The unit result of statements that produce no value."""
    return NULL_VALUE


# Conversion

def as_type(value: Value, target: DataType) -> Value:
    """
    Convert a value to the target type.

    Numbers convert between each other by truncating (float to Int32) or
    widening casts; booleans convert to numbers as 1/0 and numbers convert
    to booleans by comparing against zero.
    """
    if value.type == target:
        return value

    convertible = is_number_type(value.type) or value.type == DataType.BOOLEAN
    if not convertible:
        raise error_conversion(str(value.type), str(target))

    if target == DataType.INT32:
        try:
            return int32_val(int(value.data))
        except (ValueError, OverflowError):
            raise error_conversion(f"{value.type} {value.data}", str(target))
    if target == DataType.FLOAT32:
        return float32_val(value.data)
    if target == DataType.FLOAT64:
        return float64_val(value.data)
    if target == DataType.BOOLEAN:
        return bool_val(value.data != 0)

    raise error_conversion(str(value.type), str(target))


# Arithmetic

def _require_number(value: Value, operation: str) -> None:
    if not is_number_type(value.type):
        raise error_invalid_operation(operation, str(value.type))


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _combine(left: Value, right: Value, operation: str,
             int_op: Callable[[int, int], int],
             float_op: Callable[[Any, Any], Any]) -> Value:
    _require_number(left, operation)
    _require_number(right, operation)

    if left.type != right.type:
        common = promote(left.type, right.type)
        left = as_type(left, common)
        right = as_type(right, common)

    if left.type == DataType.INT32:
        return int32_val(int_op(int(left.data), int(right.data)))

    with np.errstate(over="ignore", under="ignore", invalid="ignore"):
        result = float_op(left.data, right.data)
    return Value(left.type, NUMPY_TYPES[left.type](result))


def add(left: Value, right: Value) -> Value:
    return _combine(left, right, "addition",
                    lambda a, b: a + b, lambda a, b: a + b)


def subtract(left: Value, right: Value) -> Value:
    return _combine(left, right, "subtraction",
                    lambda a, b: a - b, lambda a, b: a - b)


def multiply(left: Value, right: Value) -> Value:
    return _combine(left, right, "multiplication",
                    lambda a, b: a * b, lambda a, b: a * b)


def divide(left: Value, right: Value) -> Value:
    """Divide left by right; Int32 division truncates toward zero."""
    _require_number(left, "division")
    _require_number(right, "division")
    if right.data == 0:
        raise error_division_by_zero()
    return _combine(left, right, "division",
                    _truncating_div, lambda a, b: a / b)


def flip_sign(value: Value) -> Value:
    """Return the numeric value with its sign flipped."""
    _require_number(value, "sign flip")
    if value.type == DataType.INT32:
        return int32_val(-int(value.data))
    return Value(value.type, -value.data)


def is_equal(left: Value, right: Value) -> bool:
    """
    Compare two values of the same runtime type.

    Raises ComparisonError if the types differ.
    """
    if left.type != right.type:
        raise error_comparison_types(str(left.type), str(right.type))
    return bool(left.data == right.data)


# Display

def to_display_string(value: Value) -> str:
    """Convert a value to the text printed by println and the REPL."""
    if value.type == DataType.INT32:
        return str(int(value.data))
    if value.type in (DataType.FLOAT32, DataType.FLOAT64):
        return f"{float(value.data):f}"
    if value.type == DataType.BOOLEAN:
        return "1" if value.data else "0"
    if value.type == DataType.CONST_STRING:
        return value.data
    if value.type == DataType.NULL:
        return "(null)"
    return ""
