"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swapquote import __version__
from swapquote.config import get_settings
from swapquote.errors import SwapQuoteError

logger = logging.getLogger(__name__)


async def _handle_swapquote_error(request: Request, exc: SwapQuoteError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error}: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


async def _handle_body_error(request: Request, exc: BodyValidationError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected: {len(exc.errors())} body error(s)")
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="SwapQuote API",
        description="Cross-chain swap quote aggregation API",
        version=__version__,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    app.add_exception_handler(SwapQuoteError, _handle_swapquote_error)
    app.add_exception_handler(BodyValidationError, _handle_body_error)

    # Register routes
    from swapquote.api.routes import health
    from swapquote.web.controllers import assets_router, status_router, swaps_router

    app.include_router(health.router, tags=["Health"])
    app.include_router(swaps_router)
    app.include_router(status_router)
    app.include_router(assets_router)

    return app


# Default app instance
app = create_app()
