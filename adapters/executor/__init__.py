from __future__ import annotations

from typing import Optional

from config import Settings
from ports.executor import Executor

from .stack_machine import StackMachineExecutor
from .tree_walker import TreeWalkingInterpreter

EXECUTORS = {
    TreeWalkingInterpreter.name: TreeWalkingInterpreter,
    StackMachineExecutor.name: StackMachineExecutor,
}


def get_executor(name: str, settings: Optional[Settings] = None) -> Executor:
    """Zwraca executor o podanej nazwie, skonfigurowany z Settings."""
    if name not in EXECUTORS:
        raise KeyError(f"unknown executor {name!r}, choose from: {', '.join(EXECUTORS)}")
    if name == TreeWalkingInterpreter.name:
        return TreeWalkingInterpreter(max_depth=(settings or Settings()).max_depth)
    return StackMachineExecutor()


__all__ = [
    "EXECUTORS",
    "StackMachineExecutor",
    "TreeWalkingInterpreter",
    "get_executor",
]
