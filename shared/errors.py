"""
Error taxonomy shared by every service.

Services raise one of the AppError subclasses below; the handlers registered by
install_exception_handlers() turn them into {"msg": ..., "error": <kind>} bodies.
Anything else that escapes a handler is logged and reported as a generic
Internal error so store or runtime details never reach the client.
"""
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = structlog.get_logger(__name__)


class AppError(Exception):
    kind = "Internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_msg = "Server error"

    def __init__(
        self,
        msg: Optional[str] = None,
        status_code: Optional[int] = None,
        headers: Optional[dict] = None,
    ):
        self.msg = msg or self.default_msg
        if status_code is not None:
            self.status_code = status_code
        self.headers = headers
        super().__init__(self.msg)


class BadRequest(AppError):
    kind = "BadRequest"
    status_code = status.HTTP_400_BAD_REQUEST
    default_msg = "Invalid data"


class Unauthorized(AppError):
    kind = "Unauthorized"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_msg = "Could not validate credentials"

    def __init__(self, msg: Optional[str] = None):
        super().__init__(msg, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    kind = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_msg = "Forbidden"


class NotFound(AppError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_msg = "Not found"


class EmptyCart(AppError):
    kind = "EmptyCart"
    status_code = status.HTTP_400_BAD_REQUEST
    default_msg = "Cart is empty"


class Conflict(AppError):
    kind = "Conflict"
    status_code = status.HTTP_409_CONFLICT
    default_msg = "Conflict"


class Internal(AppError):
    pass


def _error_response(kind: str, msg: str, status_code: int, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"msg": msg, "error": kind}, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, kind=exc.kind)
    return _error_response(exc.kind, exc.msg, exc.status_code, exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    logger.info("request_rejected", path=request.url.path, fields=fields)
    return _error_response(BadRequest.kind, BadRequest.default_msg, BadRequest.status_code)


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("store_error", path=request.url.path, error_type=type(exc).__name__)
    return _error_response(Internal.kind, Internal.default_msg, Internal.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, error_type=type(exc).__name__)
    return _error_response(Internal.kind, Internal.default_msg, Internal.status_code)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
