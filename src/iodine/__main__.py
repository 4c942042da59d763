#!/usr/bin/env python3
"""
CLI for the Iodine interpreter.

Usage:
    python -m iodine repl [--print-tokens] [--print-ast]
    python -m iodine run FILE.iod
    python -m iodine tokens FILE.iod
    python -m iodine ast FILE.iod

Examples:
    # Interactive session with token dumps
    python -m iodine repl --print-tokens

    # Run a script with settings from a YAML file
    python -m iodine --config iodine.yaml run script.iod
"""

import argparse
import logging
import sys
from pathlib import Path


def _read_source(path: Path):
    if not path.exists():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return None
    return path.read_text(encoding="utf-8")


def cmd_repl(args, config):
    """Start the interactive REPL."""
    from .shell import Repl

    if args.print_tokens:
        config.print_tokens = True
    if args.print_ast:
        config.print_ast = True
    return Repl(config=config).run()


def cmd_run(args, config):
    """Run a script file."""
    from .shell import run_source_text

    source = _read_source(Path(args.file))
    if source is None:
        return 1
    return run_source_text(source, config=config)


def cmd_tokens(args, config):
    """Print the tokens of a script file."""
    from . import tokenize, IodineError
    from .shell import format_error, format_tokens

    source = _read_source(Path(args.file))
    if source is None:
        return 1

    try:
        tokens = tokenize(source)
    except IodineError as e:
        print(format_error(e), file=sys.stderr)
        return 1

    if tokens:
        print(format_tokens(tokens))
    return 0


def cmd_ast(args, config):
    """Print the statement ASTs of a script file."""
    from . import tokenize, parse_statements, format_ast, IodineError
    from .shell import format_error

    source = _read_source(Path(args.file))
    if source is None:
        return 1

    try:
        statements = parse_statements(tokenize(source))
    except IodineError as e:
        print(format_error(e), file=sys.stderr)
        return 1

    for statement in statements:
        print(format_ast(statement))
    return 0


def main(argv=None):
    from .config import ConfigError, load_config

    parser = argparse.ArgumentParser(
        prog='python -m iodine',
        description='Iodine interpreter',
    )
    parser.add_argument('--config', metavar='FILE',
                        help='YAML shell configuration file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # repl command
    repl_parser = subparsers.add_parser('repl', help='Start an interactive session')
    repl_parser.add_argument('--print-tokens', action='store_true',
                             help='Print the tokens of every line')
    repl_parser.add_argument('--print-ast', action='store_true',
                             help='Print the AST of every statement')

    # run command
    run_parser = subparsers.add_parser('run', help='Run a script file')
    run_parser.add_argument('file', help='Iodine source file')

    # tokens command
    tokens_parser = subparsers.add_parser('tokens', help='Print the tokens of a file')
    tokens_parser.add_argument('file', help='Iodine source file')

    # ast command
    ast_parser = subparsers.add_parser('ast', help='Print the AST of a file')
    ast_parser.add_argument('file', help='Iodine source file')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging_level,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.action == 'repl':
        return cmd_repl(args, config)
    elif args.action == 'run':
        return cmd_run(args, config)
    elif args.action == 'tokens':
        return cmd_tokens(args, config)
    elif args.action == 'ast':
        return cmd_ast(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
