"""
Runtime data types for Iodine values.

Numeric types carry a bit width used by the promotion rule:
    Int32 = 32, F32 = 32, F64 = 64
Only the numeric types can be named in a declaration (i32, f32, f64).
"""

from enum import Enum
from typing import Optional

import numpy as np

from .errors import error_invalid_operation


class DataType(Enum):
    """The runtime type tag of a Value."""
    INT32 = "Int32"
    FLOAT32 = "F32"
    FLOAT64 = "F64"
    BOOLEAN = "Boolean"
    CONST_STRING = "ConstStr"
    NULL = "Null"
    REF = "Ref"         # placeholder, never produced

    def __str__(self) -> str:
        return self.value


# numpy scalar type backing each numeric DataType
NUMPY_TYPES = {
    DataType.INT32: np.int32,
    DataType.FLOAT32: np.float32,
    DataType.FLOAT64: np.float64,
}

_BIT_WIDTHS = {
    DataType.INT32: 32,
    DataType.FLOAT32: 32,
    DataType.FLOAT64: 64,
}

# Type names accepted at the start of a declaration
BUILTIN_TYPES: dict[str, DataType] = {
    "i32": DataType.INT32,
    "f32": DataType.FLOAT32,
    "f64": DataType.FLOAT64,
}


def resolve_type_name(name: str) -> Optional[DataType]:
    """Look up a declarable type by name."""
    return BUILTIN_TYPES.get(name)


def is_number_type(t: DataType) -> bool:
    """Check if type is numeric (Int32, F32 or F64)."""
    return t in _BIT_WIDTHS


def is_float_type(t: DataType) -> bool:
    """Check if type is a floating point type."""
    return t in (DataType.FLOAT32, DataType.FLOAT64)


def bit_width(t: DataType) -> int:
    """Bit width of a numeric type."""
    if not is_number_type(t):
        raise error_invalid_operation("bit width", str(t))
    return _BIT_WIDTHS[t]


def promote(a: DataType, b: DataType) -> DataType:
    """
    Select the common type for a binary operation on a and b.

    The widest bit width wins; if either side is floating point the
    result is F32 (32 bits) or F64 (64 bits), otherwise Int32.
    """
    bits = max(bit_width(a), bit_width(b))
    if is_float_type(a) or is_float_type(b):
        return DataType.FLOAT32 if bits == 32 else DataType.FLOAT64
    return DataType.INT32
