import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.api import router as api_router
from taskboard.core.config import Settings
from taskboard.core.errors import AppError
from taskboard.core.logging_setup import setup_logging
from taskboard.core.security import PasswordHasher, TokenManager
from taskboard.db.session import Database
from taskboard.schemas.common import error_body

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input."
    first = errors[0]
    # drop the "body"/"query"/"path" prefix, keep the field path
    loc = [str(part) for part in first.get("loc", ())[1:]]
    msg = first.get("msg", "Invalid input.")
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=error_body(_validation_message(exc)))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            message = f"Route {request.method} {request.url.path} not found."
        else:
            message = str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content=error_body(message))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_body("Internal server error."))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.LOG_LEVEL)

    database = Database(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database.create_all()
        yield
        database.dispose()

    app = FastAPI(
        title="Taskboard API",
        version="1.0.0",
        description="Personal task management: lists, tasks, status history and JWT authentication",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.passwords = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.tokens = TokenManager(
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.CLIENT_URL],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
