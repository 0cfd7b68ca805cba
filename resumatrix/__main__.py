"""
Run the API with uvicorn: ``python -m resumatrix``.
"""
import logging
import sys
from dataclasses import asdict

import uvicorn

from resumatrix.core.config import Settings
from resumatrix.core.errors import ConfigurationError
from resumatrix.core.logging_config import sanitize_log_data, setup_logging
from resumatrix.main import create_app

logger = logging.getLogger("resumatrix")


def main() -> int:
    try:
        settings = Settings.from_env()
        try:
            setup_logging(settings.log_level, settings.log_dir)
        except OSError as e:
            raise ConfigurationError(f"LOG_DIR {settings.log_dir!r} is not writable: {e}") from e
        settings.validate()
        app = create_app(settings)
    except ConfigurationError as e:
        logging.basicConfig()
        logger.error(f"ERROR: {e.message}")
        return 1

    logger.debug(f"Settings: {sanitize_log_data(asdict(settings))}")
    logger.info(f"✓ Server running on port {settings.port}")
    logger.info(f"✓ Environment: {settings.environment}")
    logger.info(f"✓ CORS origin: {settings.frontend_url}")

    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
