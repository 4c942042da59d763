"""
Iodine - a minimal embeddable scripting language.

This package provides:
- Lexer: Tokenizes Iodine source text
- Parser: Builds statement ASTs from tokens
- Runtime: Typed values and a tree-walking evaluator
- Shell: REPL and script runner

Usage:
    from iodine import tokenize, parse_statements, create_state, execute

    tokens = tokenize('f64 r = 2; println(sqrt(r * 8));')
    statements = parse_statements(tokens)
    state = create_state()
    execute(statements, state)   # prints 4.000000
"""

from .tokens import (
    Token,
    TokenType,
    KEYWORDS,
)

from .errors import (
    Diagnostic,
    IodineError,
    LexerError,
    ParserError,
    EvaluationError,
    UndefinedVariableError,
    UndefinedFunctionError,
    TypeMismatchError,
    ComparisonError,
    InvalidOperationError,
    DivisionByZeroError,
    ArityError,
    ArgumentTypeError,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .types import (
    DataType,
    promote,
    bit_width,
    resolve_type_name,
)

from .ast import (
    Node,
    ConstVal,
    Arithmetic,
    UnaryOp,
    VarAssignment,
    VariableReference,
    FunctionCall,
    Comparison,
    If,
    ArithmeticOp,
    UnaryOperation,
    ComparisonOp,
    format_ast,
    print_ast,
)

from .parser import (
    TokenCursor,
    Parser,
    parse_statements,
    parse_expression,
)

from .runtime import (
    Value,
    InterpreterState,
    create_state,
    evaluate,
    execute,
    run_source,
)

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'KEYWORDS',

    # Errors
    'Diagnostic',
    'IodineError',
    'LexerError',
    'ParserError',
    'EvaluationError',
    'UndefinedVariableError',
    'UndefinedFunctionError',
    'TypeMismatchError',
    'ComparisonError',
    'InvalidOperationError',
    'DivisionByZeroError',
    'ArityError',
    'ArgumentTypeError',

    # Lexer
    'Lexer',
    'tokenize',

    # Types
    'DataType',
    'promote',
    'bit_width',
    'resolve_type_name',

    # AST
    'Node',
    'ConstVal',
    'Arithmetic',
    'UnaryOp',
    'VarAssignment',
    'VariableReference',
    'FunctionCall',
    'Comparison',
    'If',
    'ArithmeticOp',
    'UnaryOperation',
    'ComparisonOp',
    'format_ast',
    'print_ast',

    # Parser
    'TokenCursor',
    'Parser',
    'parse_statements',
    'parse_expression',

    # Runtime
    'Value',
    'InterpreterState',
    'create_state',
    'evaluate',
    'execute',
    'run_source',
]

__version__ = "0.1.0"
