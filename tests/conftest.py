"""
Shared fixtures: an app wired with fake collaborators, so no test needs
pdflatex, an API key or network access.
"""
import pytest
from fastapi.testclient import TestClient

from resumatrix.core.config import Settings
from resumatrix.core.errors import CompilationError
from resumatrix.llm.provider import LLMProvider, LLMResponse
from resumatrix.main import create_app
from resumatrix.services.resume_optimizer import ResumeOptimizer

FAKE_PDF = b"%PDF-1.5\n% fake pdf\n%%EOF\n"


class FakeProvider(LLMProvider):
    """Records calls and answers with a canned completion."""

    name = "fake"

    def __init__(self, content: str = "```latex\n\\documentclass{article}\n```", error: Exception = None):
        self.content = content
        self.error = error
        self.calls = []

    def chat(self, messages, model, temperature=0.7, max_tokens=None, **kwargs):
        self.calls.append({"messages": messages, "model": model, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, tokens_in=10, tokens_out=20, model=model)


class FakeCompiler:
    """Stands in for LatexCompiler."""

    def __init__(self, pdf: bytes = FAKE_PDF, log: str = None):
        self.pdf = pdf
        self.log = log
        self.sources = []

    def compile(self, source: str) -> bytes:
        self.sources.append(source)
        if self.log is not None:
            raise CompilationError(log=self.log)
        return self.pdf


@pytest.fixture
def settings():
    """Settings with a dummy key and log files disabled."""
    return Settings(
        gemini_api_key="test-key",
        log_dir=None,
        frontend_url="http://localhost:5173",
    )


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def fake_compiler():
    return FakeCompiler()


@pytest.fixture
def app(settings, fake_provider, fake_compiler):
    optimizer = ResumeOptimizer(fake_provider, model="test-model")
    return create_app(settings, compiler=fake_compiler, optimizer=optimizer)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
