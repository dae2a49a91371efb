"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api import auth, posts
from src.config import get_settings
from src.services.exceptions import AuthenticationError, BlogError, InternalError, ValidationError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting blog API ({settings.environment})")
    yield


app = FastAPI(
    title="Blog API",
    description="Blog with user accounts and author-owned posts",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    """Translate service errors into JSON responses."""
    if isinstance(exc, InternalError):
        logger.error(
            f"Internal error in {request.method} {request.url.path}: {exc.message}",
            exc_info=exc,
        )
        return _internal_error_response()

    content = _error_body(exc.message)
    if isinstance(exc, ValidationError) and exc.field:
        content["field"] = exc.field

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and query parameters as 400."""
    error = exc.errors()[0]
    # Integer parts are positions (list index, JSON decode offset), not field names
    loc = [
        part
        for part in error.get("loc", ())
        if isinstance(part, str) and part not in ("body", "query", "path")
    ]
    field = loc[-1] if loc else None
    message = f"{field}: {error['msg']}" if field else error["msg"]
    content = _error_body(message)
    content["field"] = field
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Log database failures and hide their details from the client."""
    logger.exception(f"Database error in {request.method} {request.url.path}")
    return _internal_error_response()


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Log unexpected failures and return an opaque 500."""
    logger.exception(f"Unhandled error in {request.method} {request.url.path}")
    return _internal_error_response()


def _error_body(message: str) -> dict:
    # The web client reads "error"; "detail" follows the FastAPI convention
    return {"detail": message, "error": message}


def _internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=InternalError.status_code,
        content=_error_body(InternalError.default_message),
    )


# Register routers
app.include_router(auth.router)
app.include_router(posts.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
