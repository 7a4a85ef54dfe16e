"""
Router: POST /evaluate
Parsuje linię i liczy ją wybranym executorem (interpreter | vm).
Nieznany executor → KeyError → 404 (globalny handler w api/main.py).
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_executors, get_parser, get_settings
from api.schemas import EvaluateRequest, EvaluateResponse

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post("", response_model=EvaluateResponse)
async def evaluate(
    body: EvaluateRequest,
    parser=Depends(get_parser),
    executors=Depends(get_executors),
    settings=Depends(get_settings),
) -> EvaluateResponse:
    name = body.executor or settings.default_executor
    if name not in executors:
        raise KeyError(f"unknown executor {name!r}")
    ast = parser.parse(body.text)
    result = executors[name].execute(ast)
    return EvaluateResponse(text=body.text, executor=name, result=result)
