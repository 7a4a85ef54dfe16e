"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Tworzy parser i oba executory (bezstanowe, tworzone raz)
  - Przechowuje je w app.state dla api/dependencies.py

Mapowanie błędów:
  ParseError                        → 422 (line, column, fragment)
  ExecutionError (błąd wejścia)     → 422 (operation)
  MalformedProgramError, CompileError → 500 (błąd wewnętrzny)
  KeyError (nieznany executor)      → 404
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.executor import EXECUTORS, get_executor
from adapters.expression_parser import PrecedenceParser
from api.routers import compiler, evaluate
from api.schemas import ExecutionErrorResponse, HealthResponse, ParseErrorResponse
from config import Settings
from contracts import CompileError, ExecutionError, ParseError

logger = logging.getLogger("rcalc.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings

    app.state.parser = PrecedenceParser(max_depth=settings.max_depth)
    app.state.executors = {name: get_executor(name, settings) for name in EXECUTORS}

    logger.info("rcalc API ready (executors: %s).", ", ".join(app.state.executors))
    yield

    logger.info("Shutting down.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)
    app.include_router(compiler.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health(request: Request):
        return HealthResponse(
            status="ok",
            version=settings.app_version,
            executors=sorted(request.app.state.executors),
        )

    # Globalne handlery błędów
    @app.exception_handler(ParseError)
    async def parse_error_handler(request: Request, exc: ParseError):
        body = ParseErrorResponse(
            detail=str(exc), line=exc.line, column=exc.column, fragment=exc.fragment,
        )
        return JSONResponse(status_code=422, content=body.model_dump())

    @app.exception_handler(ExecutionError)
    async def execution_error_handler(request: Request, exc: ExecutionError):
        if exc.internal:
            logger.error("Internal executor error: %s", exc)
        body = ExecutionErrorResponse(detail=str(exc), operation=exc.operation)
        return JSONResponse(
            status_code=500 if exc.internal else 422, content=body.model_dump(),
        )

    @app.exception_handler(CompileError)
    async def compile_error_handler(request: Request, exc: CompileError):
        logger.error("Compile error: %s", exc)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(KeyError)
    async def key_error_handler(request: Request, exc: KeyError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    return app


app = create_app()
