"""
Adapter: StackMachineExecutor
Implementuje port Executor w dwóch fazach:

  compile(ast) -> Program   — przejście postorder: lewy, prawy, operator
  run(program) -> int       — liniowa ewaluacja z jawnym stosem

Obie fazy są iteracyjne (bez rekurencji Pythona) i testowalne osobno.
MalformedProgramError oznacza błąd kompilatora, nie złe wejście użytkownika.
"""
from __future__ import annotations

import logging

from adapters.executor.arithmetic import apply_operator
from contracts import (
    ApplyOperator,
    BinOpNode,
    CompileError,
    ExprAST,
    Instruction,
    MalformedProgramError,
    NumberNode,
    Program,
    PushNumber,
)

logger = logging.getLogger("rcalc.vm")


class StackMachineExecutor:
    """Kompilator AST → RPN + maszyna stosowa."""

    name = "vm"

    # -- Executor protocol -------------------------------------------------

    def execute(self, ast: ExprAST) -> int:
        return self.run(self.compile(ast))

    # -- Fazy --------------------------------------------------------------

    def compile(self, ast: ExprAST) -> Program:
        instructions: list[Instruction] = []
        work: list[tuple[ExprAST, bool]] = [(ast, False)]
        while work:
            node, expanded = work.pop()
            if isinstance(node, NumberNode):
                instructions.append(PushNumber(value=node.value))
            elif isinstance(node, BinOpNode):
                if expanded:
                    instructions.append(ApplyOperator(op=node.op))
                else:
                    # stos LIFO: lewy zdjęty pierwszy
                    work.append((node, True))
                    work.append((node.right, False))
                    work.append((node.left, False))
            else:
                raise CompileError(f"cannot compile node of type {type(node).__name__}")

        program = Program(instructions=tuple(instructions))
        logger.debug("Compiled %d instructions", len(program.instructions))
        return program

    def run(self, program: Program) -> int:
        stack: list[int] = []
        for pc, ins in enumerate(program.instructions):
            if isinstance(ins, PushNumber):
                stack.append(ins.value)
                continue

            if len(stack) < 2:
                logger.warning("Stack underflow at instruction %d (%s)", pc, ins.op.mnemonic)
                raise MalformedProgramError(
                    f"stack underflow at instruction {pc}: {ins.op.mnemonic} "
                    f"needs 2 operands, stack has {len(stack)}",
                    operation=ins.op.mnemonic,
                )
            right = stack.pop()
            left = stack.pop()
            stack.append(apply_operator(ins.op, left, right))

        if len(stack) != 1:
            logger.warning("Program left %d values on the stack", len(stack))
            raise MalformedProgramError(
                f"program must leave exactly one value on the stack, left {len(stack)}",
                operation="run",
            )
        return stack[0]
