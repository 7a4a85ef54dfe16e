from __future__ import annotations

import pytest

from adapters.executor import TreeWalkingInterpreter
from adapters.expression_parser import PrecedenceParser
from contracts import (
    ArithmeticOverflowError,
    BinOpNode,
    DivideByZeroError,
    EvaluationDepthError,
    MAX_DEPTH_LIMIT,
    ExecutionError,
    NumberNode,
    Operator,
)
from ports.executor import Executor


def _bin(op: Operator, left: int, right: int) -> BinOpNode:
    return BinOpNode(op=op, left=NumberNode(value=left), right=NumberNode(value=right))


def test_interpreter_implements_port():
    assert isinstance(TreeWalkingInterpreter(), Executor)
    assert TreeWalkingInterpreter.name == "interpreter"


def test_interpreter_basic_operators():
    cases = [
        (_bin(Operator.ADD, 1, 2), 3),
        (_bin(Operator.SUB, 2, 1), 1),
        (_bin(Operator.MUL, 3, 2), 6),
        (_bin(Operator.DIV, 4, 1), 4),
    ]
    interpreter = TreeWalkingInterpreter()
    for ast, expected in cases:
        assert interpreter.execute(ast) == expected


def test_literal_evaluates_to_itself():
    assert TreeWalkingInterpreter().evaluate(NumberNode(value=42)) == 42


def test_division_truncates_toward_zero():
    interpreter = TreeWalkingInterpreter()

    assert interpreter.execute(_bin(Operator.DIV, 7, 2)) == 3
    assert interpreter.execute(_bin(Operator.DIV, -7, 2)) == -3
    assert interpreter.execute(_bin(Operator.DIV, 7, -2)) == -3
    assert interpreter.execute(_bin(Operator.DIV, -7, -2)) == 3


def test_parsed_expressions():
    parser = PrecedenceParser()
    interpreter = TreeWalkingInterpreter()

    assert interpreter.execute(parser.parse("1 + 2 * 3")) == 7
    assert interpreter.execute(parser.parse("8 - 3 - 2")) == 3
    assert interpreter.execute(parser.parse("1 - 8 / 3")) == -1
    assert interpreter.execute(parser.parse("2 - 5 * 3")) == -13


def test_divide_by_zero_is_an_error_not_a_crash():
    ast = PrecedenceParser().parse("1 / 0")

    with pytest.raises(DivideByZeroError) as exc:
        TreeWalkingInterpreter().execute(ast)
    assert exc.value.operation == "divide"
    assert str(exc.value) == "attempt to divide by zero: 1 / 0"


def test_left_operand_is_evaluated_first():
    ast = BinOpNode(
        op=Operator.ADD,
        left=_bin(Operator.DIV, 1, 0),
        right=_bin(Operator.MUL, 2 ** 62, 4),
    )

    with pytest.raises(DivideByZeroError):
        TreeWalkingInterpreter().execute(ast)


def test_i64_overflow_is_reported():
    ast = PrecedenceParser().parse("9223372036854775807 + 1")

    with pytest.raises(ArithmeticOverflowError) as exc:
        TreeWalkingInterpreter().execute(ast)
    assert exc.value.operation == "add"


def test_depth_bound_is_enforced():
    ast = PrecedenceParser().parse("1 + 2 + 3 + 4")

    assert TreeWalkingInterpreter(max_depth=3).execute(ast) == 10
    with pytest.raises(EvaluationDepthError):
        TreeWalkingInterpreter(max_depth=2).execute(ast)


def test_deep_tree_does_not_exhaust_python_stack():
    ast = PrecedenceParser(max_depth=5000).parse("+".join(["1"] * 2000))

    with pytest.raises(EvaluationDepthError):
        TreeWalkingInterpreter().execute(ast)


def test_largest_allowed_depth_fits_python_stack():
    terms = MAX_DEPTH_LIMIT + 1
    ast = PrecedenceParser(max_depth=MAX_DEPTH_LIMIT).parse("+".join(["1"] * terms))

    assert TreeWalkingInterpreter(max_depth=MAX_DEPTH_LIMIT).execute(ast) == terms


def test_depth_above_limit_is_rejected_at_construction():
    with pytest.raises(ValueError):
        TreeWalkingInterpreter(max_depth=MAX_DEPTH_LIMIT + 1)
    with pytest.raises(ValueError):
        TreeWalkingInterpreter(max_depth=0)


def test_unknown_node_is_rejected():
    with pytest.raises(ExecutionError):
        TreeWalkingInterpreter().execute("1 + 2")
