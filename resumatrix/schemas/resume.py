"""
Pydantic schemas for the resume endpoints.

Wire names are camelCase; Python attributes are snake_case.
"""
from typing import List
from pydantic import BaseModel, Field, field_validator

MAX_LATEX_LENGTH = 100_000
MAX_JOB_DESCRIPTION_LENGTH = 20_000
MAX_RESUME_TEXT_LENGTH = 50_000


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


class CompileRequest(BaseModel):
    """Request model for LaTeX compilation."""
    code: str = Field(..., max_length=MAX_LATEX_LENGTH, description="LaTeX source")

    @field_validator("code")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)

    class Config:
        json_schema_extra = {
            "example": {
                "code": "\\documentclass{article}\\begin{document}Hello\\end{document}"
            }
        }


class OptimizeRequest(BaseModel):
    """Request model for AI resume optimization."""
    job_description: str = Field(
        ..., alias="jobDescription", max_length=MAX_JOB_DESCRIPTION_LENGTH,
        description="Job description text"
    )
    resume_latex: str = Field(
        ..., alias="resumeLatex", max_length=MAX_LATEX_LENGTH,
        description="Resume LaTeX source"
    )

    @field_validator("job_description", "resume_latex")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)

    class Config:
        populate_by_name = True


class OptimizeResponse(BaseModel):
    success: bool = True
    optimized_latex: str = Field(..., alias="optimizedLatex")

    class Config:
        populate_by_name = True


class ATSScoreRequest(BaseModel):
    """Request model for ATS scoring."""
    resume_text: str = Field(
        ..., alias="resumeText", max_length=MAX_RESUME_TEXT_LENGTH,
        description="Plain resume text"
    )
    job_description: str = Field(
        ..., alias="jobDescription", max_length=MAX_JOB_DESCRIPTION_LENGTH,
        description="Job description text"
    )

    @field_validator("resume_text", "job_description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "resumeText": "Experienced Python developer with AWS and Docker skills",
                "jobDescription": "Looking for a Python developer familiar with AWS, Docker, and Kubernetes",
            }
        }


class ATSScoreResponse(BaseModel):
    success: bool = True
    score: int = Field(..., ge=0, le=100, description="Match score 0-100")
    keywords: List[str] = Field(default_factory=list, description="Matched keywords")
    missing_keywords: List[str] = Field(
        default_factory=list, alias="missingKeywords",
        description="Job description keywords absent from the resume"
    )

    class Config:
        populate_by_name = True
