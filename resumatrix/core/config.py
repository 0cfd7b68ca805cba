"""
Application configuration loaded from environment variables.

Settings are read once by ``Settings.from_env()`` and handed to
``create_app``. Nothing in the package reads the environment on import.
"""
import os
from dataclasses import dataclass
from typing import Optional

from resumatrix.core.errors import ConfigurationError

SUPPORTED_LLM_PROVIDERS = ("gemini", "openai")

# Levels understood by both the logging setup and uvicorn
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    # ✅ LLM
    llm_provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    llm_model: Optional[str] = None

    # ✅ Server
    frontend_url: str = "http://localhost:5173"
    port: int = 3000
    environment: str = "development"

    # ✅ Logging
    log_level: str = "INFO"
    log_dir: Optional[str] = "logs"

    # ✅ LaTeX
    latex_compiler: str = "pdflatex"
    latex_timeout_seconds: int = 60

    # ✅ Rate limits (requests per window)
    general_rate_limit: int = 100
    general_rate_window_seconds: int = 15 * 60
    compile_rate_limit: int = 10
    compile_rate_window_seconds: int = 60
    optimize_rate_limit: int = 5
    optimize_rate_window_seconds: int = 60

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "gemini").strip().lower(),
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            llm_model=os.getenv("LLM_MODEL") or None,
            frontend_url=os.getenv("FRONTEND_URL", "http://localhost:5173"),
            port=_int_env("PORT", 3000),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=os.getenv("LOG_DIR", "logs") or None,
            latex_compiler=os.getenv("LATEX_COMPILER", "pdflatex"),
            latex_timeout_seconds=_int_env("LATEX_TIMEOUT_SECONDS", 60),
            general_rate_limit=_int_env("GENERAL_RATE_LIMIT", 100),
            general_rate_window_seconds=_int_env("GENERAL_RATE_WINDOW_SECONDS", 15 * 60),
            compile_rate_limit=_int_env("COMPILE_RATE_LIMIT", 10),
            compile_rate_window_seconds=_int_env("COMPILE_RATE_WINDOW_SECONDS", 60),
            optimize_rate_limit=_int_env("OPTIMIZE_RATE_LIMIT", 5),
            optimize_rate_window_seconds=_int_env("OPTIMIZE_RATE_WINDOW_SECONDS", 60),
        )

    @property
    def llm_api_key(self) -> Optional[str]:
        """API key of the selected provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        return self.gemini_api_key

    @property
    def model_name(self) -> str:
        return self.llm_model or DEFAULT_MODELS.get(self.llm_provider, DEFAULT_MODELS["gemini"])

    def validate(self) -> None:
        """
        Check that the settings can run the service.

        Raises:
            ConfigurationError: unknown provider or log level, missing API
                key, or a non-positive numeric limit
        """
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        if self.llm_provider not in SUPPORTED_LLM_PROVIDERS:
            raise ConfigurationError(
                f"LLM_PROVIDER must be one of {', '.join(SUPPORTED_LLM_PROVIDERS)}, got {self.llm_provider!r}"
            )
        if not self.llm_api_key:
            key_name = f"{self.llm_provider.upper()}_API_KEY"
            raise ConfigurationError(
                f"{key_name} is not set. Add {key_name}=your_api_key_here to the environment"
            )

        numeric = {
            "PORT": self.port,
            "LATEX_TIMEOUT_SECONDS": self.latex_timeout_seconds,
            "GENERAL_RATE_LIMIT": self.general_rate_limit,
            "GENERAL_RATE_WINDOW_SECONDS": self.general_rate_window_seconds,
            "COMPILE_RATE_LIMIT": self.compile_rate_limit,
            "COMPILE_RATE_WINDOW_SECONDS": self.compile_rate_window_seconds,
            "OPTIMIZE_RATE_LIMIT": self.optimize_rate_limit,
            "OPTIMIZE_RATE_WINDOW_SECONDS": self.optimize_rate_window_seconds,
        }
        for name, value in numeric.items():
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
