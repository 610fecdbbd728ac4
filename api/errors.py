"""
API Error Handlers - map exceptions to small JSON error bodies

Every error response has the shape {"error": "<message>"}.
Unexpected failures are logged in full and answered with a generic 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jsonstash.errors import JsonStashError, StorageError

logger = logging.getLogger(__name__)

INTERNAL_SERVER_ERROR = "Internal Server Error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def jsonstash_error_handler(request: Request, exc: JsonStashError) -> JSONResponse:
    if isinstance(exc, StorageError) or exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(500, INTERNAL_SERVER_ERROR)
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes (404), wrong methods (405) and explicit HTTPExceptions"""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Request validation failed: {exc.errors()}")
    return error_response(400, "Bad Request")


async def os_error_handler(request: Request, exc: OSError) -> JSONResponse:
    """Filesystem failures during a request (disk full, permissions, ...)"""
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, INTERNAL_SERVER_ERROR)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Error occurred on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(500, INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JsonStashError, jsonstash_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(OSError, os_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
