"""
Recursive descent parser for Iodine.

Converts a token list into a list of statement nodes. The grammar is
parsed in a single pass over token ranges: each statement is cut out of
the stream first and the expression parser then dispatches on the first
token of its range.

Binary operators have no precedence levels. An operator following a
complete operand takes the whole rest of the range as its right-hand
side, so chains group to the right:
    a + b + c   ->  a + (b + c)
    5 + 3 * 2   ->  5 + (3 * 2)
    10 - 2 - 3  ->  10 - (2 - 3)

A prefix sign applied to an arithmetic node attaches to that node's left
operand instead of the whole node:
    -5 + 2      ->  (-5) + 2
    -(1 + 2)    ->  (-1) + 2
"""

import logging
from dataclasses import replace
from typing import Iterator, List, Optional, Sequence

from .tokens import Token, TokenType, is_literal_token
from .types import resolve_type_name
from .ast import (
    Node, ConstVal, Arithmetic, UnaryOp, VarAssignment, VariableReference,
    FunctionCall, Comparison, If,
    ArithmeticOp, UnaryOperation, ComparisonOp,
)
from .errors import (
    ParserError,
    error_unexpected_token,
    error_unexpected_eof,
    error_expected_expression,
    error_missing_close_paren,
    error_missing_close_brace,
)
from .runtime.values import Value, int32_val, float64_val, bool_val, string_val

logger = logging.getLogger(__name__)

_ARITHMETIC_OPS = {op.value: op for op in ArithmeticOp}
_UNARY_OPS = {op.value: op for op in UnaryOperation}


class TokenCursor:
    """
    A position inside a half-open range [pos, end) of a shared token list.

    All bounds checks of the grammar go through this class.
    """

    def __init__(self, tokens: Sequence[Token], start: int = 0, end: Optional[int] = None):
        self.tokens = tokens
        self.pos = start
        self.end = len(tokens) if end is None else end

    def __repr__(self) -> str:
        inner = " ".join(t.text for t in self.tokens[self.pos:self.end])
        return f"TokenCursor([{inner}])"

    def at_end(self) -> bool:
        return self.pos >= self.end

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Token at current position + offset, or None past the range end."""
        idx = self.pos + offset
        if idx >= self.end:
            return None
        return self.tokens[idx]

    def check(self, token_type: TokenType, offset: int = 0) -> bool:
        token = self.peek(offset)
        return token is not None and token.type == token_type

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.peek()
        if token is None:
            raise error_unexpected_eof("token")
        self.pos += 1
        return token

    def expect(self, token_type: TokenType, expected: str) -> Token:
        """Consume a token of the given type, or raise a ParserError."""
        token = self.peek()
        if token is None:
            raise error_unexpected_eof(expected)
        if token.type != token_type:
            raise error_unexpected_token(expected, token)
        self.pos += 1
        return token

    def skip(self, *token_types: TokenType) -> None:
        """Skip any tokens of the given types."""
        while not self.at_end() and self.tokens[self.pos].type in token_types:
            self.pos += 1

    def find(self, token_type: TokenType, stop: Optional[int] = None) -> Optional[int]:
        """Index of the first token of the given type before stop."""
        stop = self.end if stop is None else stop
        for idx in range(self.pos, stop):
            if self.tokens[idx].type == token_type:
                return idx
        return None

    def find_last(self, token_type: TokenType, stop: Optional[int] = None) -> Optional[int]:
        """Index of the last token of the given type before stop."""
        stop = self.end if stop is None else stop
        for idx in range(stop - 1, self.pos - 1, -1):
            if self.tokens[idx].type == token_type:
                return idx
        return None

    def slice(self, start: int, end: Optional[int] = None) -> "TokenCursor":
        """A new cursor over [start, end) of the same token list."""
        return TokenCursor(self.tokens, start, self.end if end is None else end)

    def rest(self) -> "TokenCursor":
        """A new cursor over the unconsumed part of this range."""
        return self.slice(self.pos)


class Parser:
    """
    Recursive descent parser for Iodine.

    Usage:
        parser = Parser(tokens)
        statements = parser.parse_statements()
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = list(tokens)

    # =========================================================================
    # Statements
    # =========================================================================

    def parse_statements(self) -> List[Node]:
        """Parse the whole token list into top-level statements."""
        statements = self._parse_block(TokenCursor(self.tokens))
        logger.debug("parsed %d statement(s) from %d token(s)",
                     len(statements), len(self.tokens))
        return statements

    def _split_statements(self, cursor: TokenCursor) -> Iterator[TokenCursor]:
        """
        Cut a range into statement ranges.

        A statement ends at a semicolon outside braces (the semicolon is
        dropped) or right after the brace closing an outermost block.
        """
        depth = 0
        start = cursor.pos
        for idx in range(cursor.pos, cursor.end):
            token_type = self.tokens[idx].type
            if token_type == TokenType.OPEN_BRACE:
                depth += 1
            elif token_type == TokenType.CLOSE_BRACE and depth > 0:
                depth -= 1
                if depth == 0:
                    yield cursor.slice(start, idx + 1)
                    start = idx + 1
            elif token_type == TokenType.SEMICOLON and depth == 0:
                yield cursor.slice(start, idx)
                start = idx + 1
        if start < cursor.end:
            yield cursor.slice(start, cursor.end)

    def _parse_block(self, cursor: TokenCursor) -> List[Node]:
        """Parse every statement of a range, skipping empty ones."""
        nodes = []
        for statement in self._split_statements(cursor):
            node = self.parse_expression(statement)
            if node is not None:
                nodes.append(node)
        return nodes

    # =========================================================================
    # Expressions
    # =========================================================================

    def parse_expression(self, cursor: TokenCursor) -> Optional[Node]:
        """
        Parse one expression from a range.

        Returns None if the range holds nothing but separators.
        """
        cursor.skip(TokenType.SEMICOLON, TokenType.NEWLINE)
        token = cursor.peek()
        if token is None:
            return None

        if is_literal_token(token.type):
            cursor.advance()
            return self._continue_from(ConstVal(self._literal_value(token)), cursor.rest())
        if token.type == TokenType.STRING_CONTENTS:
            cursor.advance()
            # A string literal ends its expression; no operator may follow
            cursor.skip(TokenType.SEMICOLON, TokenType.NEWLINE)
            if not cursor.at_end():
                raise error_unexpected_token("end of expression after string", cursor.peek())
            return ConstVal(string_val(token.text))
        if token.type == TokenType.OPEN_PAREN:
            return self._parse_parenthesized(cursor)
        if token.type == TokenType.OPERATOR:
            return self._parse_unary(cursor)
        if token.type == TokenType.NAME:
            return self._parse_name(cursor)
        if token.type == TokenType.IF:
            return self._parse_if(cursor)

        raise error_unexpected_token("expression", token)

    def _literal_value(self, token: Token) -> Value:
        if token.type == TokenType.NUMBER:
            return int32_val(token.number)
        if token.type == TokenType.DECIMAL_NUMBER:
            return float64_val(float(token.text))
        return bool_val(token.type == TokenType.TRUE)

    def _continue_from(self, left: Node, cursor: TokenCursor) -> Node:
        """Extend a parsed operand with a trailing operator or comparison."""
        cursor.skip(TokenType.NEWLINE)
        token = cursor.peek()
        if token is None or token.type == TokenType.SEMICOLON:
            return left

        if token.type == TokenType.EQUALS:
            cursor.advance()
            cursor.expect(TokenType.EQUALS, "'=' to complete '=='")
            rhs = self.parse_expression(cursor.rest())
            if rhs is None:
                raise error_expected_expression("after '=='")
            return Comparison(ComparisonOp.EQUAL, left, rhs)

        if token.type == TokenType.OPERATOR:
            cursor.advance()
            right = self.parse_expression(cursor.rest())
            if right is None:
                raise error_expected_expression(f"after '{token.text}'", token)
            return Arithmetic(_ARITHMETIC_OPS[token.text], left, right)

        raise error_unexpected_token("operator", token)

    def _parse_parenthesized(self, cursor: TokenCursor) -> Node:
        open_paren = cursor.advance()
        # The rightmost close parenthesis closes the group
        close_idx = cursor.find_last(TokenType.CLOSE_PAREN)
        if close_idx is None:
            raise error_missing_close_paren(open_paren)

        inner = self.parse_expression(cursor.slice(cursor.pos, close_idx))
        if inner is None:
            raise error_expected_expression("in parentheses", open_paren)

        return self._continue_from(inner, cursor.slice(close_idx + 1))

    def _parse_unary(self, cursor: TokenCursor) -> Node:
        token = cursor.advance()
        op = _UNARY_OPS.get(token.text)
        if op is None:
            raise error_unexpected_token("expression", token)

        operand = self.parse_expression(cursor.rest())
        if operand is None:
            raise error_expected_expression(f"after unary '{token.text}'", token)
        return apply_unary(op, operand)

    def _parse_name(self, cursor: TokenCursor) -> Node:
        name_token = cursor.advance()

        declared_type = resolve_type_name(name_token.text)
        if declared_type is not None:
            var_name = cursor.expect(TokenType.NAME, "variable name")
            cursor.expect(TokenType.EQUALS, "'='")
            value = self.parse_expression(cursor.rest())
            if value is None:
                raise error_expected_expression("after '='")
            return VarAssignment(var_name.text, True, value, declared_type)

        if cursor.check(TokenType.OPEN_PAREN):
            return self._parse_call(name_token, cursor)

        if cursor.at_end():
            return VariableReference(name_token.text)

        # A single '=' assigns; '==' compares
        if cursor.check(TokenType.EQUALS) and not cursor.check(TokenType.EQUALS, 1):
            cursor.advance()
            value = self.parse_expression(cursor.rest())
            if value is None:
                raise error_expected_expression("after '='")
            return VarAssignment(name_token.text, False, value)

        return self._continue_from(VariableReference(name_token.text), cursor.rest())

    def _parse_call(self, name_token: Token, cursor: TokenCursor) -> Node:
        open_paren = cursor.advance()
        close_idx = cursor.find_last(TokenType.CLOSE_PAREN)
        if close_idx is None:
            raise error_missing_close_paren(open_paren)

        args = []
        if close_idx > cursor.pos:
            for arg_range in self._split_arguments(cursor.slice(cursor.pos, close_idx)):
                arg = self.parse_expression(arg_range)
                if arg is None:
                    raise error_expected_expression(
                        f"for argument {len(args) + 1} of '{name_token.text}'", name_token)
                args.append(arg)

        call = FunctionCall(name_token.text, tuple(args))
        return self._continue_from(call, cursor.slice(close_idx + 1))

    def _split_arguments(self, cursor: TokenCursor) -> Iterator[TokenCursor]:
        """Cut an argument list at commas that are not nested in parentheses."""
        depth = 0
        start = cursor.pos
        for idx in range(cursor.pos, cursor.end):
            token_type = self.tokens[idx].type
            if token_type == TokenType.OPEN_PAREN:
                depth += 1
            elif token_type == TokenType.CLOSE_PAREN:
                depth -= 1
            elif token_type == TokenType.COMMA and depth == 0:
                yield cursor.slice(start, idx)
                start = idx + 1
        yield cursor.slice(start, cursor.end)

    def _parse_if(self, cursor: TokenCursor) -> Node:
        if_token = cursor.advance()
        cursor.expect(TokenType.OPEN_PAREN, "'(' after 'if'")

        brace_idx = cursor.find(TokenType.OPEN_BRACE)
        close_idx = cursor.find_last(TokenType.CLOSE_PAREN, stop=brace_idx)
        if close_idx is None:
            raise error_missing_close_paren(if_token)

        condition = self.parse_expression(cursor.slice(cursor.pos, close_idx))
        if condition is None:
            raise error_expected_expression("in if condition", if_token)

        cursor.pos = close_idx + 1
        cursor.skip(TokenType.NEWLINE)
        cursor.expect(TokenType.OPEN_BRACE, "'{'")
        body_end = self._matching_brace(cursor)
        body = self._parse_block(cursor.slice(cursor.pos, body_end))

        trailing = cursor.slice(body_end + 1)
        trailing.skip(TokenType.SEMICOLON, TokenType.NEWLINE)
        if not trailing.at_end():
            raise error_unexpected_token("end of statement after '}'", trailing.peek())

        return If(condition, tuple(body))

    def _matching_brace(self, cursor: TokenCursor) -> int:
        """Index of the brace closing the block that starts at the cursor."""
        depth = 1
        for idx in range(cursor.pos, cursor.end):
            token_type = self.tokens[idx].type
            if token_type == TokenType.OPEN_BRACE:
                depth += 1
            elif token_type == TokenType.CLOSE_BRACE:
                depth -= 1
                if depth == 0:
                    return idx
        raise error_missing_close_brace()


def apply_unary(op: UnaryOperation, operand: Node) -> Node:
    """
    Attach a prefix sign to an operand.

    If the operand is an arithmetic node, the sign wraps its left operand
    and a rebuilt arithmetic node is returned; the input is not modified.
    """
    if isinstance(operand, Arithmetic):
        return replace(operand, left=UnaryOp(op, operand.left))
    return UnaryOp(op, operand)


def parse_statements(tokens: Sequence[Token]) -> List[Node]:
    """
    Convenience function to parse a token list into statements.

    Args:
        tokens: Tokens from the lexer

    Returns:
        List of top-level statement nodes (empty for empty input)

    Raises:
        ParserError: If the tokens do not form valid statements
    """
    return Parser(tokens).parse_statements()


def parse_expression(tokens: Sequence[Token]) -> Optional[Node]:
    """Parse a whole token list as a single expression."""
    parser = Parser(tokens)
    return parser.parse_expression(TokenCursor(parser.tokens))
