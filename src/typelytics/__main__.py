"""Entry point for the chart API server."""

import contextlib
import sys

import structlog
import uvicorn

from typelytics.app import create_app
from typelytics.config import Settings
from typelytics.errors import ConfigurationError
from typelytics.logging import configure_logging

logger = structlog.get_logger()


def main() -> None:
    """Entry point for python -m typelytics."""
    settings = Settings()
    configure_logging(debug=settings.debug, json_logs=settings.log_json)

    try:
        app = create_app(settings)
    except ConfigurationError as e:
        logger.error("api_config_error", setting=e.setting, error=str(e))
        sys.exit(1)

    with contextlib.suppress(KeyboardInterrupt):
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level="warning",
            access_log=False,
        )

    sys.exit(0)


if __name__ == "__main__":
    main()
