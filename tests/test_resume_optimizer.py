"""
Unit tests for the resume optimizer prompt and output handling.
"""
import pytest

from resumatrix.core.errors import OptimizationError
from resumatrix.services.resume_optimizer import ResumeOptimizer


def test_build_prompt_contains_rules_and_inputs():
    prompt = ResumeOptimizer.build_prompt("Need Kubernetes {and} Go", "\\section{Projects}")
    assert prompt.startswith("You are an expert in ATS resume optimization.")
    assert "Return ONLY the revised LaTeX code" in prompt
    assert "DO NOT exceed one page" in prompt
    assert "\\textbf{}" in prompt
    assert "Job Description:\nNeed Kubernetes {and} Go" in prompt
    assert "User Resume LaTeX:\n\\section{Projects}" in prompt


@pytest.mark.parametrize("raw,expected", [
    ("```latex\n\\documentclass{article}\n```", "\\documentclass{article}"),
    ("```\n\\documentclass{article}\n```", "\\documentclass{article}"),
    ("LaTeX\n\\documentclass{article}", "\\documentclass{article}"),
    ("\\documentclass{article}", "\\documentclass{article}"),
    ("  \\documentclass{article} % latex  \n", "\\documentclass{article} % latex"),
])
def test_clean_output(raw, expected):
    assert ResumeOptimizer.clean_output(raw) == expected


def test_clean_output_keeps_latex_inside_document():
    raw = "\\documentclass{article}\n% compiled with latex\n"
    assert "compiled with latex" in ResumeOptimizer.clean_output(raw)


def test_optimize_sends_single_user_message(fake_provider):
    fake_provider.content = "```latex\n\\begin{document}\\end{document}\n```"
    optimizer = ResumeOptimizer(fake_provider, model="gemini-2.5-flash")

    result = optimizer.optimize("Python", "\\begin{document}\\end{document}")

    assert result == "\\begin{document}\\end{document}"
    assert len(fake_provider.calls) == 1
    messages = fake_provider.calls[0]["messages"]
    assert [m["role"] for m in messages] == ["user"]
    assert fake_provider.calls[0]["model"] == "gemini-2.5-flash"


def test_optimize_wraps_provider_errors(fake_provider):
    fake_provider.error = ConnectionError("network down")
    optimizer = ResumeOptimizer(fake_provider, model="m")

    with pytest.raises(OptimizationError) as exc_info:
        optimizer.optimize("Python", "\\documentclass{article}")

    assert exc_info.value.message == "Failed to optimize resume. Please try again later."
    assert isinstance(exc_info.value.__cause__, ConnectionError)


@pytest.mark.parametrize("content", ["", "```\n```", "   "])
def test_optimize_rejects_empty_answer(fake_provider, content):
    fake_provider.content = content
    optimizer = ResumeOptimizer(fake_provider, model="m")
    with pytest.raises(OptimizationError):
        optimizer.optimize("Python", "\\documentclass{article}")
