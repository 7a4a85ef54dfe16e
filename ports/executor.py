"""
Port: Executor
Odpowiedzialność: obliczenie wartości AST do 64-bitowej liczby całkowitej.
Dwie wymienne implementacje: interpreter drzewa i maszyna stosowa.
"""
from typing import Protocol, runtime_checkable

from contracts import ExprAST


@runtime_checkable
class Executor(Protocol):
    name: str

    def execute(self, ast: ExprAST) -> int:
        """
        Evaluates an AST to a signed 64-bit integer.
        Division truncates toward zero.
        Raises DivideByZeroError when a divisor evaluates to 0.
        Raises ArithmeticOverflowError when a result leaves the i64 range.
        Implementations must agree on every tree they both accept.
        """
        ...
