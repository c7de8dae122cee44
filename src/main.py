#!/usr/bin/env python3
"""Steam Card - Main Entry Point (development server)."""

from __future__ import annotations

import sys
from pathlib import Path

# Add project root directory to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Local imports
from src.config import Config
from src.core.logging import logger, setup_logging
from src.version import __app_name__, __version__
from src.web.app import create_app

__all__ = ["main"]


def main() -> None:
    """Main application execution flow."""
    # 1. Load configuration (.env, environment, settings file)
    config = Config()

    # 2. Setup logging
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)

    # 3. Startup logs
    logger.info("=" * 60)
    logger.info("%s %s", __app_name__, __version__)
    logger.info("=" * 60)

    if not config.STEAM_API_KEY:
        logger.error("STEAM_API_KEY is not set; add it to .env or the environment")
        sys.exit(1)

    if not config.RESOURCES_DIR.exists():
        logger.warning("Resources directory not found: %s", config.RESOURCES_DIR)

    # 4. Build the app and serve
    app = create_app(config)
    service = app.extensions["steamcard"]

    logger.info("Listening on http://%s:%d", config.HOST, config.PORT)
    try:
        app.run(host=config.HOST, port=config.PORT, threaded=True)
    finally:
        service.shutdown()


if __name__ == "__main__":
    main()
