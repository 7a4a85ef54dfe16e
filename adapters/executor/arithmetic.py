"""
Wspólna arytmetyka i64 dla obu executorów.

Dzielenie obcina w stronę zera (7 / 2 = 3, -7 / 2 = -3), a nie w dół jak '//'.
Wynik spoza zakresu i64 to błąd, a nie cicha liczba o dowolnej precyzji.
"""
from __future__ import annotations

from contracts import (
    I64_MAX,
    I64_MIN,
    ArithmeticOverflowError,
    DivideByZeroError,
    Operator,
)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


_OP_FUNCS = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUB: lambda a, b: a - b,
    Operator.MUL: lambda a, b: a * b,
    Operator.DIV: _trunc_div,
}


def apply_operator(op: Operator, left: int, right: int) -> int:
    if op is Operator.DIV and right == 0:
        raise DivideByZeroError(left)
    result = _OP_FUNCS[op](left, right)
    if not I64_MIN <= result <= I64_MAX:
        raise ArithmeticOverflowError(op, left, right)
    return result
