import logging
import numbers
from typing import Any, Callable

from fastapi import APIRouter, Body, Depends

from resumatrix.api.dependencies import get_ats_scorer
from resumatrix.core.errors import InternalError, ResuMatrixError
from resumatrix.core.logging_config import summarize_text
from resumatrix.schemas.resume import ATSScoreRequest, ATSScoreResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ATS"])

SCORE_FAILED_MESSAGE = "Failed to calculate ATS score"


def _is_valid_result(result: Any) -> bool:
    """A scorer result is only trusted with a real 0-100 score and string keywords."""
    if result is None:
        return False
    score = getattr(result, "score", None)
    keywords = getattr(result, "matched_keywords", None)
    if isinstance(score, bool) or not isinstance(score, numbers.Real):
        return False
    if score != score or not 0 <= score <= 100:  # NaN check
        return False
    if isinstance(keywords, (str, bytes)) or not isinstance(keywords, (list, tuple)):
        return False
    return all(isinstance(kw, str) for kw in keywords)


@router.post("/ats-score", response_model=ATSScoreResponse)
def ats_score(
    request: ATSScoreRequest = Body(...),
    scorer: Callable = Depends(get_ats_scorer),
):
    """
    Score how well the resume text covers the job description keywords.

    Returns the 0-100 score, the matched keywords and the missing ones, both
    in job description order.
    """
    logger.info(
        f"ATS score request: resumeText={summarize_text(request.resume_text)}, "
        f"jobDescription={summarize_text(request.job_description)}"
    )
    try:
        result = scorer(request.resume_text, request.job_description)
    except ResuMatrixError:
        raise
    except Exception as e:
        logger.error(f"Error in ATS score endpoint: {type(e).__name__}: {e}", exc_info=True)
        raise InternalError(SCORE_FAILED_MESSAGE)

    if not _is_valid_result(result):
        logger.error(f"Invalid result from ATS scorer: {result!r}")
        raise InternalError(SCORE_FAILED_MESSAGE)

    logger.info(f"ATS score result: {result.score} ({len(result.matched_keywords)} keywords matched)")

    return ATSScoreResponse(
        score=round(result.score),
        keywords=list(result.matched_keywords),
        missing_keywords=list(getattr(result, "missing_keywords", ()) or ()),
    )
