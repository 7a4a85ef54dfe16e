"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w rcalc.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.

AST i program maszyny stosowej są niemutowalne (frozen): drzewo buduje
wyłącznie parser, a executory tylko je czytają.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"

I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

# Górna granica max_depth: rekurencja interpretera musi zmieścić się
# w domyślnym limicie rekurencji Pythona (1000 ramek).
MAX_DEPTH_LIMIT = 500


# ─────────────────────────── Operatory ───────────────────────────────────

class Operator(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        return cls(symbol)

    @property
    def mnemonic(self) -> str:
        return _MNEMONICS[self]


_MNEMONICS = {
    Operator.ADD: "ADD",
    Operator.SUB: "SUB",
    Operator.MUL: "MUL",
    Operator.DIV: "DIV",
}


# ─────────────────────────── AST ─────────────────────────────────────────

class NumberNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["number"] = "number"
    value: int = Field(ge=I64_MIN, le=I64_MAX)


class BinOpNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["binop"] = "binop"
    op: Operator
    left: "ExprAST"
    right: "ExprAST"


ExprAST = Union[NumberNode, BinOpNode]
BinOpNode.model_rebuild()


def tree_height(ast: ExprAST) -> int:
    """Wysokość drzewa (liść = 0). Iteracyjnie, bez rekurencji Pythona."""
    height = 0
    stack: list[tuple[ExprAST, int]] = [(ast, 0)]
    while stack:
        node, depth = stack.pop()
        height = max(height, depth)
        if isinstance(node, BinOpNode):
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
    return height


def render_infix(ast: ExprAST) -> str:
    """Wyrażenie w pełni onawiasowane, np. '(1 + (2 * 3))'. Liście bez nawiasów."""
    out: list[str] = []
    stack: list[tuple[ExprAST, bool]] = [(ast, False)]
    while stack:
        node, expanded = stack.pop()
        if isinstance(node, NumberNode):
            out.append(str(node.value))
        elif expanded:
            right = out.pop()
            left = out.pop()
            out.append(f"({left} {node.op.value} {right})")
        else:
            stack.append((node, True))
            stack.append((node.right, False))
            stack.append((node.left, False))
    return out[0]


# ─────────────────────────── Program (maszyna stosowa) ───────────────────

class PushNumber(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["push"] = "push"
    value: int = Field(ge=I64_MIN, le=I64_MAX)


class ApplyOperator(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["apply"] = "apply"
    op: Operator


Instruction = Union[PushNumber, ApplyOperator]


class Program(BaseModel):
    """Postfiksowa (RPN) sekwencja instrukcji: operandy zawsze przed operatorem."""
    model_config = ConfigDict(frozen=True)

    instructions: tuple[Instruction, ...] = ()

    def disassemble(self) -> list[str]:
        lines = []
        for ins in self.instructions:
            if isinstance(ins, PushNumber):
                lines.append(f"PUSH {ins.value}")
            else:
                lines.append(ins.op.mnemonic)
        return lines


# ─────────────────────────── Błędy ───────────────────────────────────────

class CalcError(Exception):
    """Bazowy wyjątek rcalc. str(e) nadaje się na jednolinijkową diagnostykę."""


class ParseError(CalcError):
    def __init__(self, reason: str, line: int, column: int, fragment: str) -> None:
        self.reason = reason
        self.line = line
        self.column = column
        self.fragment = fragment
        shown = repr(fragment) if fragment else "<end of input>"
        super().__init__(
            f"syntax error in row {line}, column {column}: {reason}: {shown}"
        )


class CompileError(CalcError):
    """Błąd strukturalny wykryty dopiero przy kompilacji do programu."""


class ExecutionError(CalcError):
    internal = False

    def __init__(self, message: str, operation: Optional[str] = None) -> None:
        self.operation = operation
        super().__init__(message)


class DivideByZeroError(ExecutionError, ZeroDivisionError):
    def __init__(self, left: int) -> None:
        self.left = left
        super().__init__(f"attempt to divide by zero: {left} / 0", operation="divide")


class ArithmeticOverflowError(ExecutionError, OverflowError):
    def __init__(self, op: Operator, left: int, right: int) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"attempt to {_OP_NAMES[op]} with overflow: {left} {op.value} {right}",
            operation=_OP_NAMES[op],
        )


class EvaluationDepthError(ExecutionError):
    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"expression tree is deeper than {max_depth} levels", operation="evaluate"
        )


class MalformedProgramError(ExecutionError):
    """Niedomiar stosu lub zły rozmiar stosu na końcu: błąd kompilatora, nie wejścia."""
    internal = True


_OP_NAMES = {
    Operator.ADD: "add",
    Operator.SUB: "subtract",
    Operator.MUL: "multiply",
    Operator.DIV: "divide",
}
