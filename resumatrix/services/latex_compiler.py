"""
LaTeX to PDF compilation through an external pdflatex process.
"""
import logging
import subprocess
import tempfile
from pathlib import Path

from resumatrix.core.errors import CompilationError

logger = logging.getLogger(__name__)

TEX_FILENAME = "resume.tex"
PDF_FILENAME = "resume.pdf"

# Compiler logs can be long; clients only need the tail where errors are
MAX_ERROR_LOG_CHARS = 10_000


def _tail(text: str, limit: int = MAX_ERROR_LOG_CHARS) -> str:
    return text if len(text) <= limit else text[-limit:]


class LatexCompiler:
    """
    Compiles LaTeX source with pdflatex.

    Every call works in its own temporary directory, which is removed when
    the call returns, so concurrent compilations never share files.
    """

    def __init__(self, binary: str = "pdflatex", timeout: int = 60):
        self.binary = binary
        self.timeout = timeout

    def build_command(self, work_dir: Path) -> list[str]:
        return [
            self.binary,
            "-interaction=nonstopmode",
            "-no-shell-escape",
            f"-output-directory={work_dir}",
            str(work_dir / TEX_FILENAME),
        ]

    def compile(self, source: str) -> bytes:
        """
        Compile ``source`` and return the PDF bytes.

        A run that reports errors but still writes a PDF counts as success.

        Raises:
            CompilationError: no PDF was produced; ``log`` carries the
                compiler output
        """
        with tempfile.TemporaryDirectory(prefix="resumatrix-") as tmp:
            work_dir = Path(tmp)
            tex_path = work_dir / TEX_FILENAME
            pdf_path = work_dir / PDF_FILENAME
            tex_path.write_text(source, encoding="utf-8")

            command = self.build_command(work_dir)
            try:
                result = subprocess.run(
                    command,
                    cwd=work_dir,
                    capture_output=True,
                    text=True,
                    errors="replace",
                    timeout=self.timeout,
                )
            except FileNotFoundError:
                logger.error(f"{self.binary} not found! Install a LaTeX distribution.")
                raise CompilationError(
                    "LaTeX compiler not available",
                    log=f"{self.binary} executable not found",
                )
            except subprocess.TimeoutExpired:
                logger.warning(f"LaTeX compilation timed out after {self.timeout}s")
                raise CompilationError(
                    "LaTeX compilation timed out",
                    log=f"{self.binary} did not finish within {self.timeout} seconds",
                )

            logger.debug(f"LaTeX log:\n{result.stdout}")

            if pdf_path.exists():
                pdf = pdf_path.read_bytes()
                logger.info(f"LaTeX compiled ({len(pdf)} bytes, exit code {result.returncode})")
                return pdf

            log = result.stderr or result.stdout or f"{self.binary} exited with code {result.returncode}"
            logger.warning(f"LaTeX compilation failed with exit code {result.returncode}")
            raise CompilationError(log=_tail(log))
