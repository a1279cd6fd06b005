"""
FastAPI application entry point.

Sets up the app, lifespan (store connect/disconnect), CORS, logging, error
handlers, and includes API routers.

Run with: uvicorn taskboard.main:app
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskboard.api import auth, tasks, users
from taskboard.config import get_settings
from taskboard.database import DocumentStore, close_document_store, connect_document_store
from taskboard.errors import StoreError, TaskboardError

# Configure logging - single place for log format and level
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: runs on startup and shutdown.
    Creates the store client unless one was injected, and closes what it created.
    """
    created: Optional[DocumentStore] = None
    if getattr(app.state, "store", None) is None:
        created = connect_document_store(get_settings())
        app.state.store = created
    yield
    if created is not None:
        await close_document_store(created)
        app.state.store = None


async def taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    if isinstance(exc, StoreError):
        # Full driver detail goes to the log only
        logger.error("Store error on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": GENERIC_ERROR_MESSAGE})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body."},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": GENERIC_ERROR_MESSAGE},
    )


def create_application(store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Factory for the FastAPI app. Keeps main.py clean and testable.
    Pass store to use an existing client instead of connecting at startup.
    """
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Per-user task lists and user profiles stored in a document database.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskboardError, taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(users.router, tags=["users"])
    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
    app.include_router(auth.router, prefix="/auth", tags=["auth"])

    @app.get("/", summary="Service info")
    def read_root() -> dict:
        return {"message": f"{settings.app_name} is running", "version": app.version, "docs": "/docs"}

    @app.get("/health", summary="Health check")
    def health_check() -> dict:
        return {"status": "healthy"}

    return app


app = create_application()
