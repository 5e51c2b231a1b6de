"""
Error taxonomy and the FastAPI handlers that render it.

Error body shape: {"error": str, "details"?: str}
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        operation: str = "",
        params: Any = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.params = params
        self.details = details

    def to_body(self) -> dict[str, str]:
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class StoreError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, *, operation: str, params: Any = None, details: str | None = None) -> None:
        super().__init__("Internal Server Error", operation=operation, params=params, details=details)


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed op=%s params=%r status=%s error=%s details=%s",
        exc.operation or f"{request.method} {request.url.path}",
        exc.params,
        exc.status_code,
        exc.message,
        exc.details,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()))
    reason = str(first.get("msg") or "Invalid request")
    logger.warning(
        "request_failed op=%s params=%r status=400 error=%s",
        f"{request.method} {request.url.path}",
        dict(request.path_params),
        reason,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": f"{location}: {reason}" if location else reason},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request_failed op=%s params=%r status=500",
        f"{request.method} {request.url.path}",
        dict(request.path_params),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error"},
    )


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
