"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from tododash.api import router
from tododash.api.limits import limiter
from tododash.config import Settings, configure_logging, get_settings
from tododash.context import AppContext

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    Builds the AppContext unless one was injected through ``create_app``; only
    a context created here is closed here.
    """
    owned = getattr(app.state, "context", None) is None
    if owned:
        app.state.context = AppContext.from_settings(app.state.settings)
    await app.state.context.database.create_all()
    logger.info("%s started", app.state.settings.app_name)

    yield

    if owned:
        await app.state.context.aclose()


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures become inline ``{error}`` messages."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"{field}: {first['msg']}" if field else first["msg"]
    else:
        message = "Invalid request"
    return JSONResponse({"error": message}, status_code=400)


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or (context.settings if context else get_settings())

    app = FastAPI(
        title=settings.app_name,
        description="Todos with priorities, categories, tags and bulk edits",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.context = context
    app.state.limiter = limiter

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    if settings.cors_enabled and settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_methods=settings.cors_allow_methods,
            allow_headers=settings.cors_allow_headers,
            allow_credentials=settings.cors_allow_credentials,
            max_age=settings.cors_max_age,
        )

    # Include API routes
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run_server():
    """Run the API server."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(
        "tododash.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run_server()
