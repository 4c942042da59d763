"""
Lexer for Iodine.

Converts source text into a flat list of tokens for the parser.
Supports:
- Block comments (/* */) and line comments (//)
- Raw string literals ("..." with no escape processing)
- Integer and decimal number literals
- The keywords if/true/false

Scanning is strictly left to right with one character of lookahead.
Characters that are neither separators nor single-character tokens
accumulate into a run that is classified when it is flushed.
"""

from typing import List, Iterator
from .tokens import (
    Token, TokenType, SINGLE_CHAR_TOKENS, SEPARATORS, KEYWORDS,
)
from .errors import (
    LexerError,
    error_unterminated_string,
    error_unterminated_comment,
)


def _is_number(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _is_decimal_number(text: str) -> bool:
    if text.count('.') != 1:
        return False
    digits = text.replace('.', '')
    return _is_number(digits)


def classify(text: str) -> Token:
    """Build the token for a flushed run of characters."""
    if _is_number(text):
        return Token(TokenType.NUMBER, text, int(text))
    if _is_decimal_number(text):
        return Token(TokenType.DECIMAL_NUMBER, text)
    if text in KEYWORDS:
        return Token(KEYWORDS[text], text)
    return Token(TokenType.NAME, text)


class Lexer:
    """
    Tokenizer for Iodine source text.

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()

    Or for streaming:
        for token in Lexer(source_code):
            process(token)
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0            # Current position in source
        self._run: List[str] = []  # Characters of the current name/number run

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _is_at_end(self) -> bool:
        """Check if we've reached end of source."""
        return self.pos >= len(self.source)

    def _flush(self) -> Iterator[Token]:
        """Emit the pending run, if any."""
        if self._run:
            text = ''.join(self._run)
            self._run = []
            yield classify(text)

    def _skip_block_comment(self) -> None:
        """Skip /* ... */ comment."""
        self.pos += 2  # consume '/*'
        while not self._is_at_end():
            if self._peek() == '*' and self._peek(1) == '/':
                self.pos += 2
                return
            self.pos += 1
        raise error_unterminated_comment()

    def _skip_line_comment(self) -> None:
        """Skip // comment up to and including the end of line."""
        while not self._is_at_end():
            if self._advance() == '\n':
                return

    def _scan_string(self) -> Token:
        """Scan a string literal; contents are kept verbatim."""
        self._advance()  # consume opening quote
        start = self.pos
        end = self.source.find('"', start)
        if end < 0:
            self.pos = len(self.source)
            raise error_unterminated_string()
        self.pos = end + 1
        return Token(TokenType.STRING_CONTENTS, self.source[start:end])

    def _scan(self) -> Iterator[Token]:
        while not self._is_at_end():
            ch = self._peek()

            # Comments
            if ch == '/' and self._peek(1) == '*':
                yield from self._flush()
                self._skip_block_comment()
                continue
            if ch == '/' and self._peek(1) == '/':
                yield from self._flush()
                self._skip_line_comment()
                continue

            # String literals
            if ch == '"':
                yield from self._flush()
                yield self._scan_string()
                continue

            # Single-character tokens
            if ch in SINGLE_CHAR_TOKENS:
                yield from self._flush()
                self._advance()
                yield Token(SINGLE_CHAR_TOKENS[ch], ch)
                continue

            if ch in SEPARATORS:
                yield from self._flush()
                self._advance()
                continue

            self._run.append(self._advance())

        yield from self._flush()

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source, returning a list of tokens."""
        return list(self._scan())

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens."""
        return self._scan()


def tokenize(source: str) -> List[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: The source code to tokenize

    Returns:
        List of tokens (empty for empty input)

    Raises:
        LexerError: If a string literal or block comment is unterminated
    """
    return Lexer(source).tokenize()
