"""CLI entry point for the minirepl interpreter.

Usage:
    python -m minirepl [-v...] [--keep-going]             interactive prompt
    python -m minirepl [-v...] [--strict] <program_file>  run a script
    python -m minirepl --tokens <program_file>
    python -m minirepl --emit-ast <program_file>
    python -m minirepl [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --tokens      Print the token list of the given file and exit
  --emit-ast    Parse the given file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --strict      Parse scripts with the grammar front end (no error recovery)
  --keep-going  Run the statements that parsed even if others had errors

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_from_obj, program_to_obj
from .errors import ParseError
from .grammar import parse_strict
from .interpreter import Interpreter
from .lexer import Lexer
from .parser import Parser
from .repl import ConsoleReporter, Session


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="minirepl language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='PROGRAM_FILE', help='print the tokens of the given file')
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('--strict', action='store_true', help='parse with the grammar front end')
    parser.add_argument('--keep-going', action='store_true',
                        help='execute the statements that parsed even if others did not')
    parser.add_argument('program', nargs='?', help='program file to execute; omit for the prompt')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        source = read_source(Path(args.tokens))
        reporter = ConsoleReporter(stream=sys.stderr)
        for token in Lexer(source, reporter).tokenize():
            print(token)
        if reporter.had_error:
            sys.exit(1)
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        reporter = ConsoleReporter(stream=sys.stderr)
        statements = Parser(Lexer(source, reporter).tokenize(), reporter).parse()
        if reporter.had_error:
            sys.exit(1)
        obj = program_to_obj(statements)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        statements = program_from_obj(data)
        interpreter = Interpreter(reporter=ConsoleReporter(stream=sys.stderr), debug_level=args.v)
        try:
            fault = interpreter.interpret(statements)
        finally:
            interpreter.close()
        if fault is not None:
            sys.exit(1)
        return

    # Interactive prompt
    if not args.program:
        session = Session(keep_going=args.keep_going, debug_level=args.v)
        try:
            session.run_prompt()
        finally:
            session.close()
        return

    # Default: execute source file
    source = read_source(Path(args.program))
    reporter = ConsoleReporter(stream=sys.stderr)
    if args.strict:
        try:
            statements = parse_strict(source)
        except ParseError as e:
            reporter.error(e.line, e.where, e.message)
            sys.exit(1)
        interpreter = Interpreter(reporter=reporter, debug_level=args.v)
        try:
            fault = interpreter.interpret(statements)
        finally:
            interpreter.close()
        if fault is not None:
            sys.exit(1)
        return
    session = Session(reporter=reporter, keep_going=args.keep_going, debug_level=args.v)
    try:
        fault = session.run(source)
    finally:
        session.close()
    if fault is not None or reporter.had_error:
        sys.exit(1)


if __name__ == '__main__':
    main()
