"""
FastAPI dependencies.

Everything a handler needs is created by ``create_app`` and stored on
``app.state``; these functions hand it to the routes so tests can swap any
of them through ``app.dependency_overrides``.
"""
from typing import Callable

from fastapi import Request

from resumatrix.core.config import Settings
from resumatrix.core.rate_limit import get_client_ip
from resumatrix.services.ats_engine import calculate_ats_score
from resumatrix.services.latex_compiler import LatexCompiler
from resumatrix.services.resume_optimizer import ResumeOptimizer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_compiler(request: Request) -> LatexCompiler:
    return request.app.state.compiler


def get_optimizer(request: Request) -> ResumeOptimizer:
    return request.app.state.optimizer


def get_ats_scorer() -> Callable:
    """The scoring function used by POST /api/ats-score."""
    return calculate_ats_score


def rate_limit(name: str) -> Callable[[Request], None]:
    """Dependency that applies the named limiter from ``app.state.rate_limiters``."""

    def check(request: Request) -> None:
        limiter = request.app.state.rate_limiters[name]
        limiter.check(get_client_ip(request))

    check.__name__ = f"rate_limit_{name}"
    return check
