"""Main entry point - runs the API server."""

import logging

import uvicorn

from swapquote.api.app import create_app
from swapquote.config import get_settings

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting SwapQuote...")
    logger.info(f"Environment: {settings.environment}")
    if not settings.swapkit_api_key:
        logger.warning("SWAPKIT_API_KEY not set - quote endpoints will fail")

    logger.info(f"Starting API server on {settings.api_host}:{settings.api_port}")
    uvicorn.run(
        create_app(),
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
