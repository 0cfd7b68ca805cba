"""
Tests for logging setup and log sanitizing.
"""
import logging
from logging.handlers import RotatingFileHandler

import pytest

from resumatrix.core.logging_config import sanitize_log_data, setup_logging, summarize_text


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_console_only():
    setup_logging("DEBUG", log_dir=None)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)


def test_setup_logging_with_file(tmp_path):
    log_dir = tmp_path / "logs"
    setup_logging("warning", log_dir=str(log_dir))

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
    assert (log_dir / "resumatrix.log").exists()


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty", log_dir=None)
    assert logging.getLogger().level == logging.INFO


def test_sanitize_log_data_redacts_secrets():
    data = {
        "gemini_api_key": "g-secret",
        "openai_api_key": "sk-secret",
        "port": 3000,
        "frontend_url": "http://localhost:5173",
    }
    sanitized = sanitize_log_data(data)

    assert sanitized["gemini_api_key"] == "***REDACTED***"
    assert sanitized["openai_api_key"] == "***REDACTED***"
    assert sanitized["port"] == 3000
    assert sanitized["frontend_url"] == "http://localhost:5173"
    assert data["gemini_api_key"] == "g-secret"


def test_summarize_text():
    assert summarize_text("Experienced Python developer") == "<28 chars>"
    assert summarize_text(None) == "<NoneType>"
