"""
Health check endpoint for deployment monitoring.
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from resumatrix.schemas.system import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Liveness probe. Returns 200 while the process is serving requests."""
    return HealthResponse(
        message="ResuMatrix API is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
