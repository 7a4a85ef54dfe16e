#!/usr/bin/env python3
"""
rcalc.py — CLI narzędzie rcalc.

Każda niepusta linia wejścia to osobne wyrażenie: błąd w jednej linii
jest wypisywany, a przetwarzanie przechodzi do następnej.

Konfiguracja: zmienne środowiskowe z prefiksem RCALC_ lub plik .env
(np. RCALC_DEFAULT_EXECUTOR=vm, RCALC_LOG_LEVEL=DEBUG).

Podkomendy:
    eval     — oblicz wyrażenia (interpreter drzewa lub maszyna stosowa)
    parse    — pokaż AST jako wyrażenie w pełni onawiasowane
    compile  — pokaż program maszyny stosowej (RPN)

Użycie:
    python rcalc.py eval --text "1 + 2 * 3"
    python rcalc.py eval --executor vm --file wyrazenia.txt
    printf '7 / 2\n1 / 0\n' | python rcalc.py eval --compare
    python rcalc.py parse --text "8 - 3 - 2"
    python rcalc.py compile --text "1 + 2 * 3"
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from adapters.executor import EXECUTORS, get_executor
from adapters.expression_parser import PrecedenceParser
from adapters.executor.stack_machine import StackMachineExecutor
from config import Settings
from contracts import CalcError, render_infix, tree_height

logger = logging.getLogger("rcalc.cli")


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    _console().print(table)


def _print_program_table(listing: list[str]) -> None:
    table = Table(title=f"Program [{len(listing)}]", box=box.ASCII)
    table.add_column("#", justify="right", no_wrap=True, style="cyan")
    table.add_column("Instruction", no_wrap=True)
    for pc, line in enumerate(listing):
        table.add_row(str(pc), line)
    _console().print(table)


def _read_text(args: argparse.Namespace) -> str:
    if args.text:
        return args.text
    if getattr(args, "file", None):
        try:
            return Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            _fail(f"cannot read file: {e}")
            sys.exit(1)
    return sys.stdin.read()


def _settings() -> Settings:
    try:
        settings = Settings()
    except ValidationError as e:
        err = e.errors()[0]
        _fail(f"invalid configuration: {err['loc'][0]}: {err['msg']}")
        sys.exit(1)
    logging.basicConfig(level=settings.log_level.upper())
    return settings


def _fail(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> int:
    settings = _settings()
    parser = PrecedenceParser(max_depth=settings.max_depth)
    name = args.executor or settings.default_executor
    names = list(EXECUTORS) if args.compare else [name]
    executors = [get_executor(n, settings) for n in names]

    lines = [line for line in _read_text(args).splitlines() if line.strip()]
    if not lines:
        _fail("podaj wyrażenie przez --text, --file lub stdin")
        return 1

    failures = 0
    for line in lines:
        try:
            ast = parser.parse(line)
            results = {ex.name: ex.execute(ast) for ex in executors}
        except CalcError as exc:
            failures += 1
            _fail(str(exc))
            continue

        if len(set(results.values())) > 1:
            failures += 1
            detail = ", ".join(f"{n}={v}" for n, v in results.items())
            logger.warning("Executors disagree on %r: %s", line, detail)
            _fail(f"executors disagree: {detail}")
            continue

        print(next(iter(results.values())))

    return 1 if failures else 0


def _parse(args: argparse.Namespace) -> int:
    settings = _settings()
    try:
        ast = PrecedenceParser(max_depth=settings.max_depth).parse(_read_text(args))
    except CalcError as exc:
        _fail(str(exc))
        return 1

    _print_kv_table("AST", [
        ("infix", render_infix(ast)),
        ("root", ast.node_type),
        ("height", tree_height(ast)),
    ])
    return 0


def _compile(args: argparse.Namespace) -> int:
    settings = _settings()
    try:
        ast = PrecedenceParser(max_depth=settings.max_depth).parse(_read_text(args))
        program = StackMachineExecutor().compile(ast)
    except CalcError as exc:
        _fail(str(exc))
        return 1

    _print_program_table(program.disassemble())
    return 0


# -- main ------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="rcalc",
        description="rcalc — kalkulator wyrażeń całkowitych (+ - * /)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Oblicz wyrażenia, po jednym na linię")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")
    p.add_argument("--file", "-f", help="Plik z wyrażeniami, po jednym na linię")
    p.add_argument("--executor", "-e", choices=sorted(EXECUTORS),
                   help="Domyślnie RCALC_DEFAULT_EXECUTOR")
    p.add_argument("--compare", action="store_true",
                   help="Uruchom oba executory i sprawdź zgodność wyników")

    # parse
    p = sub.add_parser("parse", help="Pokaż AST wyrażenia")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")

    # compile
    p = sub.add_parser("compile", help="Pokaż program maszyny stosowej")
    p.add_argument("--text", "-t", help="Wyrażenie (lub stdin)")

    args = parser.parse_args(argv)

    cmds = {
        "eval":    _eval,
        "parse":   _parse,
        "compile": _compile,
    }
    sys.exit(cmds[args.command](args))


if __name__ == "__main__":
    main()
