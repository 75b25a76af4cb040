"""
Centralized error rendering for the persons API.

Every error body has the shape {"errors": "<short message>"}.
Validator and driver details are logged, never sent to clients.
"""
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Iterable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from personsvc.common.logging import get_logger
from personsvc.domain.errors import PersistenceError, ValidationError

logger = get_logger(__name__)

UNMARSHALLING_ERROR = "unmarshalling error"
VALIDATION_ERROR = "validation error"
WRONG_ID = "wrong id"
INTERNAL_ERROR = "internal error"

# error kinds meaning "the body does not decode into the request shape"
_DECODE_ERROR_TYPES = {
    "json_invalid",
    "json_type",
    "model_type",
    "model_attributes_type",
    "int_parsing_size",
    "int_from_float",
    "greater_than_equal",
    "less_than_equal",
}


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": message}, headers=headers)


def payload_error_message(errors: Iterable[Dict[str, Any]]) -> str:
    """
    Undecodable bodies (bad JSON, wrong JSON types, out-of-range numbers) are
    "unmarshalling error"; a decodable body missing ``name`` or with ``name: null``
    is "validation error".
    """
    for e in errors:
        kind = e.get("type", "")
        if kind in _DECODE_ERROR_TYPES:
            return UNMARSHALLING_ERROR
        if kind.endswith("_type") and e.get("input") is not None:
            return UNMARSHALLING_ERROR
    return VALIDATION_ERROR


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def handle_validation(_request: Request, exc: ValidationError) -> JSONResponse:
        logger.error("validation error: %s", exc.message)
        return error_response(HTTPStatus.BAD_REQUEST, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(PersistenceError)
    async def handle_persistence(_request: Request, exc: PersistenceError) -> JSONResponse:
        # only reached when a route lets a store error escape unmapped
        logger.error("unhandled storage error: %s", exc.message, exc_info=exc)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, "storage error")

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        # failed commits in the session dependency end up here too
        logger.error("unexpected error: %s", type(exc).__name__, exc_info=exc)
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR, INTERNAL_ERROR)
