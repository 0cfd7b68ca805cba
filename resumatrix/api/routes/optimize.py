import logging

from fastapi import APIRouter, Body, Depends

from resumatrix.api.dependencies import get_optimizer, rate_limit
from resumatrix.core.logging_config import summarize_text
from resumatrix.schemas.resume import OptimizeRequest, OptimizeResponse
from resumatrix.services.resume_optimizer import ResumeOptimizer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Resume Tailoring"])


@router.post(
    "/optimize",
    response_model=OptimizeResponse,
    dependencies=[Depends(rate_limit("optimize"))],
)
def optimize_resume(
    request: OptimizeRequest = Body(...),
    optimizer: ResumeOptimizer = Depends(get_optimizer),
):
    """Rewrite the resume LaTeX for the job description."""
    logger.info(
        f"Optimize request: jobDescription={summarize_text(request.job_description)}, "
        f"resumeLatex={summarize_text(request.resume_latex)}"
    )
    optimized = optimizer.optimize(request.job_description, request.resume_latex)
    return OptimizeResponse(optimized_latex=optimized)
