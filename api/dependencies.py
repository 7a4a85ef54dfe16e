"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni adapter przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.executor import StackMachineExecutor
from adapters.expression_parser import PrecedenceParser
from config import Settings
from ports.executor import Executor


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_parser(request: Request) -> PrecedenceParser:
    return request.app.state.parser


def get_executors(request: Request) -> dict[str, Executor]:
    return request.app.state.executors


def get_stack_machine(request: Request) -> StackMachineExecutor:
    return request.app.state.executors[StackMachineExecutor.name]
