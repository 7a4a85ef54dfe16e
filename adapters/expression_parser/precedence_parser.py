"""
Adapter: PrecedenceParser
Implementuje port ExpressionParser.

Gramatyka (lewostronnie łączna, '*' '/' wiążą mocniej niż '+' '-'):
  expression = term (('+'|'-') term)*
  term       = number (('*'|'/') number)*
  number     = whitespace* digit+

Białe znaki (spacja, tab, CR, LF) są pomijane przed każdym tokenem i na końcu.
Pozycje błędów: wiersz i kolumna liczone od 1, fragment = nieprzetworzona reszta.
Wysokość drzewa jest ograniczona przez max_depth, więc konsumenci AST
mogą bezpiecznie używać rekurencji.
"""
from __future__ import annotations

import logging
import re

from contracts import (
    I64_MAX,
    BinOpNode,
    ExprAST,
    NumberNode,
    Operator,
    ParseError,
)

logger = logging.getLogger("rcalc.parser")

_WHITESPACE_RE = re.compile(r"[ \t\r\n]*")
_DIGITS_RE = re.compile(r"[0-9]+")

# i64::MAX ma 19 cyfr; dłuższe literały odrzucamy bez wołania int()
_MAX_LITERAL_DIGITS = len(str(I64_MAX))

_ADD_SUB = {"+": Operator.ADD, "-": Operator.SUB}
_MUL_DIV = {"*": Operator.MUL, "/": Operator.DIV}


class _Parser:
    def __init__(self, text: str, max_depth: int) -> None:
        self._text = text
        self._pos = 0
        self._max_depth = max_depth

    def parse(self) -> ExprAST:
        node, _ = self._expression()
        self._skip_whitespace()
        if self._pos < len(self._text):
            raise self._error("unexpected trailing input")
        return node

    # -- Reguły gramatyki ---------------------------------------------------

    def _expression(self) -> tuple[ExprAST, int]:
        left, height = self._term()
        while True:
            found = self._operator(_ADD_SUB)
            if found is None:
                return left, height
            op, op_pos = found
            right, right_height = self._term()
            height = self._check_height(max(height, right_height) + 1, op_pos)
            left = BinOpNode(op=op, left=left, right=right)

    def _term(self) -> tuple[ExprAST, int]:
        left = self._number()
        height = 0
        while True:
            found = self._operator(_MUL_DIV)
            if found is None:
                return left, height
            op, op_pos = found
            right = self._number()
            height = self._check_height(height + 1, op_pos)
            left = BinOpNode(op=op, left=left, right=right)

    def _number(self) -> NumberNode:
        self._skip_whitespace()
        m = _DIGITS_RE.match(self._text, self._pos)
        if m is None:
            raise self._error("expected a number")
        digits = m.group().lstrip("0") or "0"
        if len(digits) > _MAX_LITERAL_DIGITS or int(digits) > I64_MAX:
            raise self._error("integer literal out of range", m.start())
        self._pos = m.end()
        return NumberNode(value=int(digits))

    # -- Prywatne -----------------------------------------------------------

    def _operator(self, table: dict[str, Operator]) -> tuple[Operator, int] | None:
        self._skip_whitespace()
        if self._pos >= len(self._text):
            return None
        op = table.get(self._text[self._pos])
        if op is None:
            return None
        op_pos = self._pos
        self._pos += 1
        return op, op_pos

    def _skip_whitespace(self) -> None:
        self._pos = _WHITESPACE_RE.match(self._text, self._pos).end()

    def _check_height(self, height: int, op_pos: int) -> int:
        if height > self._max_depth:
            raise self._error(
                f"expression nests deeper than {self._max_depth} levels", op_pos
            )
        return height

    def _error(self, reason: str, pos: int | None = None) -> ParseError:
        if pos is None:
            pos = self._pos
        line = self._text.count("\n", 0, pos) + 1
        column = pos - (self._text.rfind("\n", 0, pos) + 1) + 1
        return ParseError(reason, line=line, column=column, fragment=self._text[pos:])


class PrecedenceParser:
    """Parser rekurencyjnie zstępujący z priorytetami operatorów (precedence climbing)."""

    def __init__(self, max_depth: int = 200) -> None:
        self._max_depth = max_depth

    # -- ExpressionParser protocol -----------------------------------------

    def parse(self, text: str) -> ExprAST:
        ast = _Parser(text, self._max_depth).parse()
        logger.debug("Parsed %r -> %s", text, type(ast).__name__)
        return ast
