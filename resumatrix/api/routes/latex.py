import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import Response

from resumatrix.api.dependencies import get_compiler, rate_limit
from resumatrix.core.logging_config import summarize_text
from resumatrix.schemas.resume import CompileRequest
from resumatrix.services.latex_compiler import LatexCompiler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["LaTeX"])


@router.post(
    "/compile",
    dependencies=[Depends(rate_limit("compile"))],
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
def compile_latex(
    request: CompileRequest = Body(...),
    compiler: LatexCompiler = Depends(get_compiler),
):
    """
    Compile LaTeX source to PDF.

    Failures raise CompilationError, which the app turns into a 500 with the
    compiler log in ``error``.
    """
    logger.info(f"Compile request: code={summarize_text(request.code)}")
    pdf = compiler.compile(request.code)
    return Response(content=pdf, media_type="application/pdf")
