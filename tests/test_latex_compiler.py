"""
Unit tests for LatexCompiler. subprocess.run is replaced, so pdflatex does
not need to be installed.
"""
import subprocess
from pathlib import Path

import pytest

from resumatrix.core.errors import CompilationError
from resumatrix.services import latex_compiler
from resumatrix.services.latex_compiler import MAX_ERROR_LOG_CHARS, LatexCompiler

SOURCE = "\\documentclass{article}\\begin{document}Hello\\end{document}"


def _fake_run(pdf: bytes = None, stdout: str = "", stderr: str = "", returncode: int = 0, seen=None):
    """Build a subprocess.run replacement that optionally writes a PDF."""

    def run(command, cwd=None, **kwargs):
        work_dir = Path(cwd)
        if seen is not None:
            seen.append({
                "command": command,
                "cwd": work_dir,
                "tex": (work_dir / "resume.tex").read_text(encoding="utf-8"),
                "kwargs": kwargs,
            })
        if pdf is not None:
            (work_dir / "resume.pdf").write_bytes(pdf)
        return subprocess.CompletedProcess(command, returncode, stdout=stdout, stderr=stderr)

    return run


def test_compile_returns_pdf_bytes(monkeypatch):
    seen = []
    monkeypatch.setattr(latex_compiler.subprocess, "run", _fake_run(pdf=b"%PDF-1.5", seen=seen))

    pdf = LatexCompiler().compile(SOURCE)

    assert pdf == b"%PDF-1.5"
    assert seen[0]["tex"] == SOURCE
    command = seen[0]["command"]
    assert command[0] == "pdflatex"
    assert "-interaction=nonstopmode" in command
    assert "-no-shell-escape" in command
    assert f"-output-directory={seen[0]['cwd']}" in command
    assert seen[0]["kwargs"]["timeout"] == 60


def test_compile_cleans_up_work_directory(monkeypatch):
    seen = []
    monkeypatch.setattr(latex_compiler.subprocess, "run", _fake_run(pdf=b"%PDF", seen=seen))

    LatexCompiler().compile(SOURCE)

    assert not seen[0]["cwd"].exists()


def test_each_compile_uses_its_own_directory(monkeypatch):
    seen = []
    monkeypatch.setattr(latex_compiler.subprocess, "run", _fake_run(pdf=b"%PDF", seen=seen))

    compiler = LatexCompiler()
    compiler.compile(SOURCE)
    compiler.compile(SOURCE)

    assert seen[0]["cwd"] != seen[1]["cwd"]


def test_pdf_with_nonzero_exit_is_success(monkeypatch):
    """pdflatex in nonstopmode may report errors and still write a PDF."""
    monkeypatch.setattr(
        latex_compiler.subprocess, "run",
        _fake_run(pdf=b"%PDF", stdout="LaTeX Warning", returncode=1),
    )
    assert LatexCompiler().compile(SOURCE) == b"%PDF"


def test_missing_pdf_raises_with_stderr(monkeypatch):
    monkeypatch.setattr(
        latex_compiler.subprocess, "run",
        _fake_run(stdout="stdout log", stderr="! Emergency stop.", returncode=1),
    )
    with pytest.raises(CompilationError) as exc_info:
        LatexCompiler().compile(SOURCE)

    assert exc_info.value.message == "LaTeX compilation failed"
    assert exc_info.value.log == "! Emergency stop."


def test_missing_pdf_falls_back_to_stdout(monkeypatch):
    monkeypatch.setattr(
        latex_compiler.subprocess, "run",
        _fake_run(stdout="! Undefined control sequence.", returncode=1),
    )
    with pytest.raises(CompilationError) as exc_info:
        LatexCompiler().compile(SOURCE)
    assert exc_info.value.log == "! Undefined control sequence."


def test_missing_pdf_without_output_reports_exit_code(monkeypatch):
    monkeypatch.setattr(latex_compiler.subprocess, "run", _fake_run(returncode=3))
    with pytest.raises(CompilationError) as exc_info:
        LatexCompiler().compile(SOURCE)
    assert "code 3" in exc_info.value.log


def test_long_logs_keep_the_tail(monkeypatch):
    log = "a" * MAX_ERROR_LOG_CHARS + "! the actual error"
    monkeypatch.setattr(latex_compiler.subprocess, "run", _fake_run(stdout=log, returncode=1))
    with pytest.raises(CompilationError) as exc_info:
        LatexCompiler().compile(SOURCE)

    assert len(exc_info.value.log) == MAX_ERROR_LOG_CHARS
    assert exc_info.value.log.endswith("! the actual error")


def test_missing_binary(monkeypatch):
    def run(*args, **kwargs):
        raise FileNotFoundError("pdflatex")

    monkeypatch.setattr(latex_compiler.subprocess, "run", run)
    with pytest.raises(CompilationError) as exc_info:
        LatexCompiler(binary="pdflatex").compile(SOURCE)
    assert exc_info.value.message == "LaTeX compiler not available"


def test_timeout(monkeypatch):
    def run(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs.get("timeout"))

    monkeypatch.setattr(latex_compiler.subprocess, "run", run)
    with pytest.raises(CompilationError) as exc_info:
        LatexCompiler(timeout=5).compile(SOURCE)
    assert exc_info.value.message == "LaTeX compilation timed out"
    assert "5 seconds" in exc_info.value.log


def test_custom_binary_is_used(monkeypatch):
    seen = []
    monkeypatch.setattr(latex_compiler.subprocess, "run", _fake_run(pdf=b"%PDF", seen=seen))
    LatexCompiler(binary="/opt/texlive/bin/pdflatex").compile(SOURCE)
    assert seen[0]["command"][0] == "/opt/texlive/bin/pdflatex"
