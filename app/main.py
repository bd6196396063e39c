"""FastAPI application factory and entry point."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.exceptions import (
    ChatError,
    ConflictError,
    InvalidCredentials,
    NotAParticipant,
    NotFound,
    ValidationError,
)
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers import conversations_router, system, users_router

logger = get_logger()

# Most specific first; the first isinstance match wins.
ERROR_STATUS_CODES = (
    (ValidationError, 422),
    (ConflictError, 409),
    (InvalidCredentials, 401),
    (NotAParticipant, 404),
    (NotFound, 404),
)


def status_for(exc: ChatError) -> int:
    for exc_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 400


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "%s %s -> %d %s", request.method, request.url.path, status_code, exc.message
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.testing = testing
    app.add_exception_handler(ChatError, chat_error_handler)

    app.include_router(system.router)
    app.include_router(users_router.router)
    app.include_router(conversations_router.router)
    return app


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
