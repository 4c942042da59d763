"""
Iodine exceptions and diagnostics.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E4xx: Evaluation errors

Every error is fatal to the statement being processed; the host shell
decides whether to continue with the next one.
"""

from dataclasses import dataclass, field
from typing import Optional, List
from .tokens import Token


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                           # E002, E101, etc.
    message: str                        # Human-readable message
    token: Optional[Token] = None       # Offending token, None for end of stream
    expected: Optional[str] = None      # Description of what was expected
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        parts = [f"error[{self.code}]: {self.message}"]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)


class IodineError(Exception):
    """Base exception for all Iodine errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(IodineError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(IodineError):
    """Error during parsing (E1xx)."""

    @property
    def token(self) -> Optional[Token]:
        return self.diagnostic.token

    @property
    def expected(self) -> Optional[str]:
        return self.diagnostic.expected


class EvaluationError(IodineError):
    """Error during evaluation (E4xx)."""
    pass


class UndefinedVariableError(EvaluationError):
    """E401: Reference to an undeclared variable."""
    pass


class UndefinedFunctionError(EvaluationError):
    """E402: Call to an unregistered function."""
    pass


class TypeMismatchError(EvaluationError):
    """E403: Runtime type does not match the required type."""
    pass


class ComparisonError(TypeMismatchError):
    """E404: Comparison between values of different types."""
    pass


class InvalidOperationError(EvaluationError):
    """E405: Operation not defined for the operand type."""
    pass


class DivisionByZeroError(EvaluationError):
    """E406: Division by zero."""
    pass


class ArityError(EvaluationError):
    """E407: Builtin called with the wrong number of arguments."""
    pass


class ArgumentTypeError(EvaluationError):
    """E408: Builtin called with an unsupported argument type."""
    pass


def _describe(token: Optional[Token]) -> str:
    if token is None:
        return "end of stream"
    return f"{token.type.name} '{token.text}'" if token.text.strip() else token.type.name


# --- Lexer error codes ---

def error_unterminated_string() -> LexerError:
    """E002: Unterminated string literal."""
    diag = Diagnostic(
        code="E002",
        message="unterminated string literal (EOF while parsing string)",
        expected='closing \'"\'',
        hints=["string literals must be closed with a matching double quote"],
    )
    return LexerError(diag)


def error_unterminated_comment() -> LexerError:
    """E004: Unterminated block comment."""
    diag = Diagnostic(
        code="E004",
        message="unterminated block comment (expected closing */)",
        expected="'*/'",
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: Token) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"expected {expected}, found {_describe(found)}",
        token=found,
        expected=expected,
    )
    return ParserError(diag)


def error_unexpected_eof(expected: str) -> ParserError:
    """E102: Unexpected end of token stream."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of token stream, expected {expected}",
        expected=expected,
    )
    return ParserError(diag)


def error_expected_expression(context: str, token: Optional[Token] = None) -> ParserError:
    """E103: An expression is required but none was found."""
    diag = Diagnostic(
        code="E103",
        message=f"expected expression {context}",
        token=token,
        expected="expression",
    )
    return ParserError(diag)


def error_missing_close_paren(token: Optional[Token] = None) -> ParserError:
    """E104: Missing close parenthesis."""
    diag = Diagnostic(
        code="E104",
        message="could not find close parenthesis",
        token=token,
        expected="')'",
    )
    return ParserError(diag)


def error_missing_close_brace(token: Optional[Token] = None) -> ParserError:
    """E105: Missing close brace."""
    diag = Diagnostic(
        code="E105",
        message="could not find close brace",
        token=token,
        expected="'}'",
    )
    return ParserError(diag)


# --- Evaluation error codes ---

def error_undefined_variable(name: str) -> UndefinedVariableError:
    """E401: Undefined variable."""
    return UndefinedVariableError(Diagnostic(
        code="E401",
        message=f"reference to undefined variable '{name}'",
    ))


def error_undefined_function(name: str) -> UndefinedFunctionError:
    """E402: Undefined function."""
    return UndefinedFunctionError(Diagnostic(
        code="E402",
        message=f"call to undefined function '{name}'",
    ))


def error_assignment_type(name: str, declared: str, found: str) -> TypeMismatchError:
    """E403: Reassignment with a value of the wrong type."""
    return TypeMismatchError(Diagnostic(
        code="E403",
        message=f"assignment to variable '{name}' ({declared}) with wrong type {found}",
        hints=["reassignment does not convert; declare the variable again to change its value type"],
    ))


def error_conversion(source: str, target: str) -> TypeMismatchError:
    """E403: Value cannot be converted to the requested type."""
    return TypeMismatchError(Diagnostic(
        code="E403",
        message=f"cannot convert {source} to {target}",
    ))


def error_comparison_types(left: str, right: str) -> ComparisonError:
    """E404: Comparison of differently typed values."""
    return ComparisonError(Diagnostic(
        code="E404",
        message=f"cannot compare {left} with {right}",
    ))


def error_invalid_operation(operation: str, type_name: str) -> InvalidOperationError:
    """E405: Operation not supported for a type."""
    return InvalidOperationError(Diagnostic(
        code="E405",
        message=f"{operation} is not supported for {type_name}",
    ))


def error_division_by_zero() -> DivisionByZeroError:
    """E406: Division by zero."""
    return DivisionByZeroError(Diagnostic(
        code="E406",
        message="division by zero",
    ))


def error_arity(name: str, expected: int, found: int) -> ArityError:
    """E407: Wrong number of builtin arguments."""
    return ArityError(Diagnostic(
        code="E407",
        message=f"{name}() takes {expected} argument(s), {found} given",
    ))


def error_argument_type(name: str, type_name: str) -> ArgumentTypeError:
    """E408: Unsupported builtin argument type."""
    return ArgumentTypeError(Diagnostic(
        code="E408",
        message=f"{name}() does not accept an argument of type {type_name}",
    ))
