"""Maps domain exceptions to ``{"error": ...}`` JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.domain.exceptions import DuplicateEntityError, RepositoryError, UnknownActionError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def unknown_action_handler(request: Request, exc: UnknownActionError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Invalid body for %s: %d error(s)", request.url, exc.error_count())
    return _error(status.HTTP_400_BAD_REQUEST, f"Invalid request body: {exc}")


async def duplicate_entity_handler(request: Request, exc: DuplicateEntityError) -> JSONResponse:
    return _error(status.HTTP_409_CONFLICT, str(exc))


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    logger.error("Storage failure on %s: %s", request.url, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UnknownActionError, unknown_action_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(DuplicateEntityError, duplicate_entity_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
