"""
Adapter: TreeWalkingInterpreter
Implementuje port Executor — rekurencyjne przejście ExprAST.

Lewe poddrzewo liczone przed prawym (deterministyczna kolejność błędów).
Głębokość rekurencji = wysokość drzewa; ograniczona przez max_depth,
przekroczenie daje EvaluationDepthError zamiast RecursionError.
max_depth nie może przekroczyć MAX_DEPTH_LIMIT.
"""
from __future__ import annotations

import logging

from adapters.executor.arithmetic import apply_operator
from contracts import (
    MAX_DEPTH_LIMIT,
    BinOpNode,
    EvaluationDepthError,
    ExecutionError,
    ExprAST,
    NumberNode,
)

logger = logging.getLogger("rcalc.interpreter")


class TreeWalkingInterpreter:
    """Ewaluator AST przez bezpośrednią rekurencję strukturalną."""

    name = "interpreter"

    def __init__(self, max_depth: int = 200) -> None:
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
            )
        self.max_depth = max_depth

    # -- Executor protocol -------------------------------------------------

    def execute(self, ast: ExprAST) -> int:
        value = self._eval(ast, 0)
        logger.debug("Evaluated tree -> %d", value)
        return value

    evaluate = execute

    # -- Prywatne ----------------------------------------------------------

    def _eval(self, node: ExprAST, depth: int) -> int:
        if isinstance(node, NumberNode):
            return node.value

        if isinstance(node, BinOpNode):
            if depth >= self.max_depth:
                raise EvaluationDepthError(self.max_depth)
            left = self._eval(node.left, depth + 1)
            right = self._eval(node.right, depth + 1)
            return apply_operator(node.op, left, right)

        raise ExecutionError(
            f"unknown AST node type: {type(node).__name__}", operation="evaluate"
        )
