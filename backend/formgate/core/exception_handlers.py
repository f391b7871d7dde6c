"""
exception_handlers.py
- Purpose: Turn AppError into its JSON body with a log level that matches
  what went wrong.

An upload rejection is an expected outcome (INFO), a bad upload name is a
client mistake (WARNING), and asking for a field that was never submitted is
a defect in our own calling code (ERROR).
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from formgate.core import AppError, ErrorCode, ErrorReason

logger = logging.getLogger("formgate.exceptions")

_LEVELS: dict[ErrorCode, int] = {
    ErrorCode.UPLOAD_REJECTED: logging.INFO,
    ErrorCode.VALIDATION_ERROR: logging.WARNING,
    ErrorCode.FIELD_NOT_SUBMITTED: logging.ERROR,
}


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    details = exc.details or {}
    logger.log(
        _LEVELS.get(exc.code, logging.WARNING),
        "app_error",
        extra={
            "path": request.url.path,
            "status_code": exc.status_code,
            "code": exc.code.value,
            "upload_code": details.get("upload_code"),
            "field": details.get("field"),
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_exception", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": ErrorCode.INTERNAL_ERROR.value,
                "reason": ErrorReason.UNHANDLED.value,
            }
        },
    )
