"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from contracts import Instruction


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str = Field(..., max_length=10_000)
    executor: Optional[str] = None  # "interpreter" | "vm"; None = RCALC_DEFAULT_EXECUTOR


class EvaluateResponse(BaseModel):
    text: str
    executor: str
    result: int


# ─────────────────────────── /compile ────────────────────────────

class CompileRequest(BaseModel):
    text: str = Field(..., max_length=10_000)


class CompileResponse(BaseModel):
    text: str
    instructions: list[Instruction]
    listing: list[str]  # np. ["PUSH 1", "PUSH 2", "ADD"]


# ─────────────────────────── błędy ───────────────────────────────

class ParseErrorResponse(BaseModel):
    detail: str
    line: int
    column: int
    fragment: str


class ExecutionErrorResponse(BaseModel):
    detail: str
    operation: Optional[str] = None


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
    executors: list[str]
