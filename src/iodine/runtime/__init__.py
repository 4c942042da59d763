"""
Iodine Runtime - Tree-walking interpreter for Iodine statements.

This module provides:
- Value: Runtime values with their type tag and arithmetic
- InterpreterState: Variable and function tables
- Builtins: sqrt and println
- evaluate/execute/run_source: The evaluator entry points
"""

from .values import (
    Value,
    DataType,
    NULL_VALUE,
    int32_val,
    float32_val,
    float64_val,
    bool_val,
    string_val,
    null_val,
    as_type,
    add,
    subtract,
    multiply,
    divide,
    flip_sign,
    is_equal,
    to_display_string,
)

from .context import (
    Variable,
    Function,
    InterpreterState,
    create_state,
)

from .builtins import (
    BuiltinFunction,
    DEFAULT_BUILTINS,
    register_builtins,
)

from .interpreter import (
    evaluate,
    execute,
    run_source,
)

__all__ = [
    # Values
    'Value',
    'DataType',
    'NULL_VALUE',
    'int32_val',
    'float32_val',
    'float64_val',
    'bool_val',
    'string_val',
    'null_val',
    'as_type',
    'add',
    'subtract',
    'multiply',
    'divide',
    'flip_sign',
    'is_equal',
    'to_display_string',

    # Context
    'Variable',
    'Function',
    'InterpreterState',
    'create_state',

    # Builtins
    'BuiltinFunction',
    'DEFAULT_BUILTINS',
    'register_builtins',

    # Interpreter
    'evaluate',
    'execute',
    'run_source',
]
