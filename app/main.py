"""FastAPI entrypoint for the book catalog service."""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.models.book_model import ErrorResponse
from app.routers import router as api_router
from app.services.book_store import BookStore
from app.services.exceptions import BookServiceError, InternalFault
from app.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

ROUTE_TABLE = (
    ("GET", "/api/books", "Get all books"),
    ("GET", "/api/books/:id", "Get a specific book"),
    ("GET", "/api/books/search/:query", "Search books"),
    ("POST", "/api/books", "Create a new book"),
    ("PUT", "/api/books/:id", "Update a book completely"),
    ("PATCH", "/api/books/:id", "Partially update a book"),
    ("DELETE", "/api/books/:id", "Delete a specific book"),
    ("DELETE", "/api/books", "Delete all books"),
)


def _error(status_code: int, error: str, message: Optional[str] = None, **extra) -> JSONResponse:
    content = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


async def book_service_error_handler(request: Request, exc: BookServiceError) -> JSONResponse:
    # Client errors are expected traffic, only log them briefly
    if not isinstance(exc, InternalFault):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.message}")
    return _error(exc.status_code, exc.message)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request body",
        details=jsonable_encoder(exc.errors()),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        return _error(status.HTTP_404_NOT_FOUND, "Route not found", f"Cannot {request.method} {url}")
    return _error(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(store: Optional[BookStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around ``store`` (a fresh one when omitted)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Server is running on port {settings.port} ({settings.app_env})")
        logger.info("API Documentation:")
        for method, path, summary in ROUTE_TABLE:
            logger.info(f"{method:<7}{path:<26}- {summary}")
        yield
        logger.info("Shutting down book catalog")

    app = FastAPI(
        title="Book Catalog API",
        version="0.1.0",
        description="In-memory CRUD and search over a catalog of books.",
        lifespan=lifespan,
    )
    app.state.book_store = store if store is not None else BookStore()
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BookServiceError, book_service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/health", tags=["health"])
    async def healthcheck():
        """Basic health check."""
        return {"status": "ok", "env": settings.app_env}

    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
