"""
Application error taxonomy.

Every error carries the HTTP status it maps to and a client-facing message.
The exception handlers registered in main.py turn them into the standard
``{"success": false, "message": ...}`` envelope.
"""
from typing import Optional


class ResuMatrixError(Exception):
    """Base class for all application errors."""
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"success": False, "message": self.message}


class InputError(ResuMatrixError):
    """The caller sent missing, empty or malformed input."""
    status_code = 400
    default_message = "Invalid input"


class InternalError(ResuMatrixError):
    """Something broke on our side. The message stays generic."""
    status_code = 500
    default_message = "Internal server error"


class CompilationError(ResuMatrixError):
    """pdflatex did not produce a PDF."""
    status_code = 500
    default_message = "LaTeX compilation failed"

    def __init__(self, message: Optional[str] = None, log: str = ""):
        super().__init__(message)
        self.log = log

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["error"] = self.log
        return payload


class OptimizationError(ResuMatrixError):
    """The language model call failed or returned nothing usable."""
    status_code = 500
    default_message = "Failed to optimize resume. Please try again later."


class RateLimitExceeded(ResuMatrixError):
    status_code = 429
    default_message = "Too many requests, please try again later."

    def __init__(self, message: Optional[str] = None, retry_after: int = 60):
        super().__init__(message)
        self.retry_after = retry_after


class ConfigurationError(ResuMatrixError):
    """Missing or invalid settings, raised at startup."""
    status_code = 500
    default_message = "Server is not configured correctly"
