import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from resumatrix import __version__
from resumatrix.api.dependencies import rate_limit
from resumatrix.api.routes import ats, health, latex, optimize
from resumatrix.core.config import Settings
from resumatrix.core.errors import RateLimitExceeded, ResuMatrixError
from resumatrix.core.rate_limit import build_rate_limiters
from resumatrix.llm.router import build_provider
from resumatrix.services.latex_compiler import LatexCompiler
from resumatrix.services.resume_optimizer import ResumeOptimizer

logger = logging.getLogger(__name__)


# ============================================
# ✅ EXCEPTION HANDLERS
# ============================================

def _error_response(status_code: int, payload: dict, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


async def resumatrix_error_handler(request: Request, exc: ResuMatrixError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimitExceeded):
        headers = {"Retry-After": str(exc.retry_after)}
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return _error_response(exc.status_code, exc.to_payload(), headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    logger.info(f"Validation failed on {request.url.path}: {errors}")
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        {"success": False, "message": "Validation failed", "errors": errors},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Route not found"
    else:
        message = str(exc.detail)
    return _error_response(
        exc.status_code,
        {"success": False, "message": message},
        getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        {"success": False, "message": "Internal server error"},
    )


# ============================================
# ✅ FASTAPI APP FACTORY
# ============================================

def create_app(
    settings: Optional[Settings] = None,
    *,
    compiler: Optional[LatexCompiler] = None,
    optimizer: Optional[ResumeOptimizer] = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators not passed in are created from ``settings``; building the
    optimizer this way requires a configured LLM provider.

    Raises:
        ConfigurationError: the LLM provider cannot be configured
    """
    settings = settings or Settings.from_env()

    if optimizer is None:
        optimizer = ResumeOptimizer(build_provider(settings), model=settings.model_name)
    if compiler is None:
        compiler = LatexCompiler(settings.latex_compiler, timeout=settings.latex_timeout_seconds)

    app = FastAPI(
        title="ResuMatrix API",
        version=__version__,
        dependencies=[Depends(rate_limit("general"))],
    )

    app.state.settings = settings
    app.state.rate_limiters = build_rate_limiters(settings)
    app.state.compiler = compiler
    app.state.optimizer = optimizer

    # ✅ CORS LOCKDOWN — ONLY ALLOW THE FRONTEND
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.add_exception_handler(ResuMatrixError, resumatrix_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # ✅ REGISTER ALL ROUTERS
    app.include_router(health.router)
    app.include_router(latex.router)
    app.include_router(optimize.router)
    app.include_router(ats.router)

    logger.info(f"ResuMatrix API ready (environment={settings.environment}, cors={settings.frontend_url})")
    return app
