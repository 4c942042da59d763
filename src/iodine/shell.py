"""
Host shell for Iodine: the interactive REPL and the script runner.

Both catch IodineError at statement boundaries and report it as
``Error: <message>``. The REPL keeps going after an error; the script
runner stops at the first one.
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .config import ShellConfig
from .tokens import Token, TokenType
from .lexer import tokenize
from .parser import parse_statements
from .ast import format_ast
from .errors import IodineError
from .runtime import InterpreterState, create_state, evaluate

logger = logging.getLogger(__name__)


def format_token(token: Token) -> str:
    """Render one token as ``Token: KIND (text)``."""
    text = "\\n" if token.type == TokenType.NEWLINE else token.text
    return f"Token: {token.type.name} ({text})"


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render a token list, one token per line."""
    return "\n".join(format_token(t) for t in tokens)


def format_error(error: IodineError) -> str:
    """Render an error as the shell reports it: ``Error: <message>``."""
    return f"Error: {error.diagnostic.message}"


class Repl:
    """
    Line-oriented read-eval-print loop.

    Each input line is tokenized, split into statements and evaluated;
    non-null results are printed.

    Usage:
        repl = Repl(config=load_config("iodine.yaml"))
        exit_code = repl.run()
    """

    def __init__(self, state: Optional[InterpreterState] = None,
                 config: Optional[ShellConfig] = None,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        self.config = config or ShellConfig()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.state = state or create_state(output=self.stdout)

    def _write(self, text: str) -> None:
        print(text, file=self.stdout)

    def run_line(self, line: str) -> bool:
        """
        Evaluate one input line.

        Returns False if an error was reported.
        """
        try:
            tokens = tokenize(line)
            if self.config.print_tokens and tokens:
                self._write(format_tokens(tokens))

            for statement in parse_statements(tokens):
                if self.config.print_ast:
                    self._write(format_ast(statement))
                value = evaluate(statement, self.state)
                if not value.is_null:
                    self._write(str(value))
        except IodineError as e:
            logger.debug("line failed with %s", e.code)
            self._write(format_error(e))
            return False
        return True

    def run(self) -> int:
        """Read lines until end of input. Returns the exit status."""
        while True:
            self.stdout.write(self.config.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break
            ok = self.run_line(line.rstrip("\n"))
            if not ok and self.config.stop_on_error:
                return 1
        return 0


def run_source_text(source: str,
                    state: Optional[InterpreterState] = None,
                    config: Optional[ShellConfig] = None,
                    stdout: Optional[TextIO] = None,
                    stderr: Optional[TextIO] = None) -> int:
    """
    Run script text, stopping at the first error.

    Returns:
        0 on success, 1 if an error was reported on stderr
    """
    config = config or ShellConfig()
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    state = state or create_state(output=stdout)

    try:
        tokens = tokenize(source)
        if config.print_tokens:
            print(format_tokens(tokens), file=stdout)
        statements = parse_statements(tokens)
        for statement in statements:
            if config.print_ast:
                print(format_ast(statement), file=stdout)
            evaluate(statement, state)
    except IodineError as e:
        print(format_error(e), file=stderr)
        return 1
    return 0


def run_script(path: Path | str,
               state: Optional[InterpreterState] = None,
               config: Optional[ShellConfig] = None,
               stdout: Optional[TextIO] = None,
               stderr: Optional[TextIO] = None) -> int:
    """Read a script file and run it with :func:`run_source_text`."""
    source = Path(path).read_text(encoding="utf-8")
    logger.debug("running %s (%d chars)", path, len(source))
    return run_source_text(source, state=state, config=config,
                           stdout=stdout, stderr=stderr)
