import logging

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from friendvault.exceptions import FriendVaultError

logger = logging.getLogger(__name__)


def _error_body(status: str, message: str, error: str | None = None) -> dict:
    body = {"success": False, "status": status, "message": message}
    if error is not None:
        body["error"] = error
    return body


def register_error_handlers(app: FastAPI):
    @app.exception_handler(FriendVaultError)
    async def domain_error_handler(request: Request, exc: FriendVaultError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.status, exc.message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content=_error_body("invalid_request", "Missing or invalid request data.", errors),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        sentry_sdk.capture_exception(exc)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "A database error occurred.", str(exc)),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        sentry_sdk.capture_exception(exc)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", "Internal server error", type(exc).__name__),
        )
