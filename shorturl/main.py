"""
FastAPI Application Entry Point

This module initializes the FastAPI application and configures:
- API routes
- Middleware (logging, CORS, rate limiting)
- Registry lifecycle (created on startup, released on shutdown)
- Application metadata

Run with `shorturl` (console script) or `uvicorn shorturl.main:app`.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shorturl import __version__
from shorturl.api import endpoints
from shorturl.core.exceptions import ServiceUnavailableError
from shorturl.core.rate_limit import limiter
from shorturl.core.registry_manager import initialize_registry, shutdown_registry
from shorturl.core.setting import settings
from shorturl.middleware.logging import add_logging_middleware

logging.getLogger("shorturl").setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the registry on startup and release it on shutdown."""
    await initialize_registry()
    yield
    await shutdown_registry()


# Title and description are used in auto-generated API documentation
app = FastAPI(
    title="Short URL Service",
    description="Turns URLs into sequential numeric short URLs and redirects them back",
    version=__version__,
    docs_url="/docs",  # Swagger UI documentation
    redoc_url="/redoc",  # ReDoc documentation
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ServiceUnavailableError)
async def service_unavailable_handler(request: Request, exc: ServiceUnavailableError):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc)}
    )


add_logging_middleware(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint with service information.
    """
    return {
        "message": "Short URL Service",
        "version": __version__,
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}


app.include_router(endpoints.router, tags=["Short URL"])


def run() -> None:
    """Serve the application on settings.HOST:settings.PORT."""
    uvicorn.run(
        "shorturl.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
