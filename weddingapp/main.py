import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import admin, api
from .config import DEFAULT_SECRET, Settings, load_settings
from .db import Store
from .errors import AppError, StoreError, ValidationError
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _field_names(exc: RequestValidationError) -> list[str]:
    names = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        # ("body", "event_name") -> "event_name"; a missing body is just "body"
        name = str(loc[-1]) if len(loc) > 1 else str(loc[0]) if loc else "body"
        if name not in names:
            names.append(name)
    return names


def error_response(exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        fields = ", ".join(_field_names(exc))
        return error_response(ValidationError(f"Missing or invalid fields: {fields}"))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        # detail stays in the server log; the session is rolled back when it closes
        logger.error("store error on %s %s: %s", request.method, request.url.path, exc)
        return error_response(StoreError())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=getattr(exc, "headers", None))


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Build the API around one store handle.

    The store is opened when the app starts serving and closed when it shuts
    down; route handlers only ever see sessions handed to them by ``get_db``.
    """
    settings = settings or load_settings()
    store = store or Store(settings.database_url)
    if settings.jwt_secret == DEFAULT_SECRET:
        logger.warning("JWT_SECRET not set; using the development secret")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title="Wedding Planner API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(api.router, prefix="/api")
    app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
    return app


def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("starting server on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
