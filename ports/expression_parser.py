"""
Port: ExpressionParser
Odpowiedzialność: zamiana linii tekstu na AST z zachowaniem priorytetów operatorów.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, text: str) -> ExprAST:
        """
        Parses one line of text into an ExprAST.
        '*' and '/' bind tighter than '+' and '-'; each level is left-associative.
        Leading and trailing whitespace is ignored.
        Raises ParseError (line, column, fragment) on the first syntax error,
        including unconsumed trailing input. Never returns a partial tree.
        """
        ...
