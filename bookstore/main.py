"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() function returns configured app
   - Tests import the module-level `app` and override its dependencies

2. Lifespan Events
   - startup: build the payment gateway and keep it on app.state
   - shutdown: close the gateway's HTTP client

3. Exception Handlers
   - Application errors, validation errors and HTTP errors all use the
     same envelope: {"status": "error", "message": ..., "errors": ...}
   - Anything unexpected becomes a generic 500
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.config import get_settings
from bookstore.exceptions import BookstoreError
from bookstore.routers import books_router, users_router
from bookstore.services.payments import build_payment_gateway

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "We encountered a problem while processing your request. Please try again"
)

# Location prefixes FastAPI puts in front of field names
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


# =============================================================================
# Error Formatting
# =============================================================================
def error_body(message: str, errors: Any = None) -> dict[str, Any]:
    return {"status": "error", "message": message, "errors": errors}


def format_validation_errors(raw_errors: list[dict]) -> list[dict[str, str]]:
    """
    Reduce pydantic error dicts to {"field", "message"} pairs.

    The raw dicts can hold exception objects in "ctx", which are not JSON
    serializable.
    """
    formatted = []
    for error in raw_errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        formatted.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


def validation_response(raw_errors: list[dict]) -> JSONResponse:
    errors = format_validation_errors(raw_errors)
    first = errors[0] if errors else {"field": "body", "message": "Invalid request"}
    message = f"{first['field']}: {first['message']}"

    logger.warning(f"Validation failed: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, errors),
    )


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Code before yield: Runs on startup
    Code after yield: Runs on shutdown
    """
    # ----- STARTUP -----
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"API version: {settings.api_version}")

    app.state.payment_gateway = build_payment_gateway(settings)

    yield  # Application runs here

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {settings.app_name}...")
    app.state.payment_gateway.close()


# =============================================================================
# Application Factory
# =============================================================================
def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.app_name,
        description="""
## Bookstore API

An online bookstore backend.

### Features
- **Users**: Registration and login
- **Books**: Catalog CRUD with cover image uploads, filtering and pagination
- **Purchases**: Payment initialization and purchase history

### Authentication
Send the token from /user/login as `Authorization: JWT <token>`.
        """,
        version=settings.api_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookstoreError)
    async def bookstore_exception_handler(
        request: Request,
        exc: BookstoreError,
    ) -> JSONResponse:
        """Render application errors with their own status code."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.errors),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Invalid bodies, query strings and path parameters are a 400."""
        return validation_response(list(exc.errors()))

    @app.exception_handler(ValidationError)
    async def pydantic_validation_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """Raised by the book payload parser, which validates by hand."""
        return validation_response(exc.errors())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Unknown routes, wrong methods and malformed multipart bodies."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(
        request: Request,
        exc: SQLAlchemyError,
    ) -> JSONResponse:
        """
        Handle SQLAlchemy database errors.

        Logs the actual error while hiding details from users in production.
        """
        logger.error(f"Database error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": False,
                "message": GENERIC_ERROR_MESSAGE,
                "errors": None if settings.is_production else str(exc),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": False,
                "message": GENERIC_ERROR_MESSAGE,
                "errors": None if settings.is_production else str(exc),
            },
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    api_prefix = f"/api/{settings.api_version}"

    app.include_router(users_router, prefix=api_prefix)
    app.include_router(books_router, prefix=api_prefix)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """
        Health check endpoint.

        Used by load balancers and container liveness probes.
        """
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": settings.api_version,
            "environment": settings.environment,
        }

    @app.get(
        "/",
        tags=["Root"],
        summary="API root",
        description="Welcome message and API information.",
    )
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.api_version,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookstore.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookstore.main
# In production, use: uvicorn bookstore.main:app --host 0.0.0.0 --port 8001

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookstore.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
