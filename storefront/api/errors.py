"""Translate domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from storefront.models.errors import ErrorMessages
from storefront.services.errors import NotFound, Unauthenticated, ValidationFailed

logger = logging.getLogger(__name__)


def _error_body(messages: list[str]) -> dict:
    return ErrorMessages(mensagens=messages).model_dump()


async def _validation_failed(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.info(
        "Request rejected",
        extra={"path": request.url.path, "violations": exc.messages},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(exc.messages),
    )


async def _malformed_request(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body could not be parsed into the request schema at all."""

    messages = []
    for error in exc.errors():
        named = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = named[-1] if named else "body"
        messages.append(f"{field} {error.get('msg', 'is invalid')}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(messages),
    )


async def _not_found(request: Request, exc: NotFound) -> Response:
    logger.debug("Not found: %s", exc)
    return Response(status_code=status.HTTP_404_NOT_FOUND)


async def _unauthenticated(request: Request, exc: Unauthenticated) -> Response:
    logger.info("Unauthenticated request to %s: %s", request.url.path, exc)
    return Response(
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, _validation_failed)
    app.add_exception_handler(RequestValidationError, _malformed_request)
    app.add_exception_handler(NotFound, _not_found)
    app.add_exception_handler(Unauthenticated, _unauthenticated)
