import sys
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import Settings, load_settings, configure_logging
from .errors import ThumbnailsError, UpstreamError, ConfigurationError
from .routes import thumbnail_routes

VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "GET",
}

logger = logging.getLogger("ytthumbs.main")


async def handle_thumbnails_error(request: Request, exc: ThumbnailsError) -> JSONResponse:
    """
    Turn a ThumbnailsError into a JSON error response.
    """
    if exc.status_code < 500:
        logger.warning(f"Rejected {request.url.path}: {exc.detail}")
    elif isinstance(exc, UpstreamError) and exc.upstream_status is not None:
        logger.error(f"Upstream failure ({exc.upstream_status}) for {request.url.path}")
    else:
        logger.error(f"Failed {request.url.path}: {exc.detail}")

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    Build the API. Settings are loaded from the environment if not given;
    `transport` replaces the network layer of the outbound HTTP client.
    """
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with httpx.AsyncClient(timeout=settings.upstream_timeout, transport=transport) as client:
            app.state.http_client = client
            yield

    app = FastAPI(
        title="ytthumbs API",
        description="Thumbnail and watch URLs of the latest videos of a YouTube channel",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response

    app.add_exception_handler(ThumbnailsError, handle_thumbnails_error)
    app.include_router(thumbnail_routes.router, tags=["thumbnails"])

    @app.get("/")
    async def root():
        return {
            "message": "Welcome to ytthumbs API",
            "version": VERSION,
            "docs": "/docs",
        }

    return app


def run() -> None:
    """Console entry point: check configuration, then serve."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.critical(str(e))
        sys.exit(1)

    configure_logging(settings)
    logger.info(f"Starting ytthumbs on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
