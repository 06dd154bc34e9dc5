"""CLI entry point for the BasicSharp interpreter.

Usage:
    python -m basicsharp [-v|-vv|-vvv] [--seed N] <program_file>
    python -m basicsharp [-v...] --emit-ast <program_file>
    python -m basicsharp [-v...] --ast <ast_json_file>

Options:
  -v              Increase debug verbosity (can be repeated)
  --debug-file    Where the debug trace goes (default: debug.txt)
  --encoding      Text encoding of the program file (default: utf-8)
  --seed          Seed for the random numbers produced by RND
  --emit-ast      Parse the program and write an AST JSON file next to it
  --ast           Execute a previously emitted AST JSON file

The program is lexed, parsed and executed as a stream, so statements run
before the rest of the file has been read. Any lexer, parser or interpreter
error, and any unreadable program or AST file, is printed as a single line
and the process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .errors import BasicError
from .interpreter import Interpreter
from .lexer import lex, read_source
from .parser import parse


def fail(message: str):
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def load_source(program_file: Path, encoding: str) -> str:
    try:
        with open(program_file, 'rb') as f:
            return read_source(f, encoding)
    except UnicodeDecodeError as e:
        fail(f"cannot decode {program_file} as {encoding}: {e.reason}")
    except LookupError:
        fail(f"unknown encoding {encoding}")


def load_ast(ast_file: Path) -> list:
    try:
        with open(ast_file, 'r', encoding='utf-8') as f:
            return program_from_obj(json.load(f))
    # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
    except (ValueError, KeyError, TypeError) as e:
        fail(f"invalid AST file {ast_file}: {e}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="BasicSharp language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving the debug trace')
    parser.add_argument('--encoding', default='utf-8', help='text encoding of the program file')
    parser.add_argument('--seed', type=int, default=None, help='seed for RND')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', action='store_true', help='write the AST as JSON instead of running')
    group.add_argument('--ast', action='store_true', help='the program file is an AST JSON file')
    parser.add_argument('program', help='program file to execute')
    args = parser.parse_args(argv)

    program_file = Path(args.program)
    if not program_file.exists():
        fail(f"file {program_file} not found")

    try:
        # Emit AST mode
        if args.emit_ast:
            statements = list(parse(lex(load_source(program_file, args.encoding))))
            out_path = program_file.with_name(program_file.name + '.ast.json')
            with open(out_path, 'w', encoding='utf-8') as out:
                json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
            print(str(out_path))
            return

        if args.ast:
            statements = load_ast(program_file)
        else:
            statements = parse(lex(load_source(program_file, args.encoding)))

        interpreter = Interpreter(seed=args.seed, debug_level=args.v, debug_file=args.debug_file)
        interpreter.run(statements)
    except BasicError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
