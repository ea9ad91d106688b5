"""Main module for the Tartan Market API."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tartan_market.config import get_settings
from tartan_market.container import Container
from tartan_market.db.sessions import init_db
from tartan_market.errors import MarketError
from tartan_market.routers import (items_router, search_router,
                                   uploads_router, users_router)

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create tables and providers at startup; close providers on shutdown."""
    container: Container = fastapi_app.state.container
    settings = container.settings()
    logger.info("Starting Tartan Market API (environment: %s)", settings.environment)

    init_db(container.engine())

    # Keep provider refs for clean shutdown
    providers_to_close = [
        container.identity_provider(),
        container.storage_provider(),
        container.search_provider(),
    ]

    yield

    for provider in providers_to_close:
        try:
            await provider.close()
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)
    container.engine().dispose()
    logger.info("Shut down Tartan Market API")


async def market_error_handler(_: Request, exc: MarketError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    errors = exc.errors()
    loc = tuple(errors[0].get("loc", ())) if errors else ()
    # Query/path errors name the parameter; body errors (incl. malformed JSON) do not.
    if len(loc) >= 2 and loc[0] != "body":
        message = f"Invalid {loc[-1]}"
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the original error; the client only sees a generic message."""
    logger.error(
        "Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(container: Container | None = None) -> FastAPI:
    """Build the application around a DI container (tests pass one with overrides)."""
    if container is None:
        container = Container()

    fastapi_app = FastAPI(
        title="Tartan Market",
        description="Student marketplace and commission listings API",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container

    fastapi_app.add_exception_handler(MarketError, market_error_handler)
    fastapi_app.add_exception_handler(RequestValidationError, validation_error_handler)
    fastapi_app.add_exception_handler(StarletteHTTPException, http_error_handler)
    fastapi_app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    fastapi_app.include_router(items_router)
    fastapi_app.include_router(users_router)
    fastapi_app.include_router(search_router)
    fastapi_app.include_router(uploads_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run("tartan_market.main:app", host=settings.host, port=settings.port)


def run_dev():
    """Run the development server with auto-reload."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run("tartan_market.main:app", host="0.0.0.0", port=settings.port, reload=True)
