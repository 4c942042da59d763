"""
Token types for the Iodine lexer.

Tokens carry only their kind and raw text (plus the pre-parsed value of
integer literals); no position information is tracked.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """All token types recognized by the lexer."""

    # --- Names and literals ---
    NAME = auto()               # identifiers and type names (i32, f64, ...)
    NUMBER = auto()             # 42
    DECIMAL_NUMBER = auto()     # 3.14, .5
    STRING_CONTENTS = auto()    # "raw text" (quotes stripped)

    # --- Keywords ---
    IF = auto()                 # if
    TRUE = auto()               # true
    FALSE = auto()              # false

    # --- Operators ---
    OPERATOR = auto()           # + - * /
    EQUALS = auto()             # = (== is two EQUALS tokens)

    # --- Delimiters ---
    SEMICOLON = auto()          # ;
    OPEN_PAREN = auto()         # (
    CLOSE_PAREN = auto()        # )
    COMMA = auto()              # ,
    OPEN_BRACE = auto()         # {
    CLOSE_BRACE = auto()        # }
    NEWLINE = auto()            # \n


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    text: str                       # The original source text
    number: Optional[int] = None    # Pre-parsed value for NUMBER tokens

    def __str__(self) -> str:
        if self.type == TokenType.NEWLINE:
            return f"{self.type.name}"
        return f"{self.type.name}({self.text!r})"


# Characters that end the current run and are emitted as their own token
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    ';': TokenType.SEMICOLON,
    '(': TokenType.OPEN_PAREN,
    ')': TokenType.CLOSE_PAREN,
    ',': TokenType.COMMA,
    '+': TokenType.OPERATOR,
    '-': TokenType.OPERATOR,
    '*': TokenType.OPERATOR,
    '/': TokenType.OPERATOR,
    '=': TokenType.EQUALS,
    '{': TokenType.OPEN_BRACE,
    '}': TokenType.CLOSE_BRACE,
    '\n': TokenType.NEWLINE,
}

# Characters that end the current run without producing a token
SEPARATORS: frozenset[str] = frozenset(' \t\r')

# Reserved words - maps string to token type
KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}


def is_literal_token(token_type: TokenType) -> bool:
    """Check if a token type starts a scalar literal (number or boolean)."""
    return token_type in (
        TokenType.NUMBER,
        TokenType.DECIMAL_NUMBER,
        TokenType.TRUE,
        TokenType.FALSE,
    )
