"""
Router: POST /compile
Zwraca program maszyny stosowej (RPN) bez wykonywania go.
"""
from fastapi import APIRouter, Depends

from api.dependencies import get_parser, get_stack_machine
from api.schemas import CompileRequest, CompileResponse

router = APIRouter(prefix="/compile", tags=["compile"])


@router.post("", response_model=CompileResponse)
async def compile_expression(
    body: CompileRequest,
    parser=Depends(get_parser),
    vm=Depends(get_stack_machine),
) -> CompileResponse:
    program = vm.compile(parser.parse(body.text))
    return CompileResponse(
        text=body.text,
        instructions=list(program.instructions),
        listing=program.disassemble(),
    )
