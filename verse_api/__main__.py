"""Process entry point: `python -m verse_api` or the `verse-api` script."""

import logging

import uvicorn

from verse_api.config import settings
from verse_api.main import create_app, setup_logging

logger = logging.getLogger("verse_api")


def main() -> None:
    setup_logging()
    logger.info("Starting server on port %d...", settings.port)
    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
