"""Translate service/repository exceptions into JSON error responses."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from persons_api.repositories.errors import ConstraintViolationError
from persons_api.services.directory_service import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error_response(exc.message, 400)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error_response(exc.message, 404)

    @app.exception_handler(ConstraintViolationError)
    async def constraint_violation_handler(request: Request, exc: ConstraintViolationError):
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return _error_response(str(exc), 409)
