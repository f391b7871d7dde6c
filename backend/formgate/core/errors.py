"""
errors.py
- Purpose: AppError used for caller misuse and at the HTTP edge.
- Pattern: domain failures are returned as data; AppError is raised only when
  a caller breaks a contract, and the handler converts it to JSON.
"""

from dataclasses import dataclass
from typing import Any

from fastapi import status as http_status

from formgate.core.error_codes import ErrorCode
from formgate.core.error_reasons import ErrorReason


@dataclass
class AppError(Exception):
    code: ErrorCode
    reason: str
    status_code: int = http_status.HTTP_400_BAD_REQUEST
    details: dict[str, Any] | None = None
    message: str | None = None  # Optional human-readable message

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": {
                "code": self.code,
                "reason": self.reason,
                "message": self.message if self.message else self.reason,
            }
        }
        if self.details:
            payload["error"]["details"] = self.details
        return payload


def field_not_submitted(field: str) -> AppError:
    return AppError(
        code=ErrorCode.FIELD_NOT_SUBMITTED,
        reason=str(ErrorReason.FIELD_NOT_SUBMITTED.value),
        status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"field": field},
        message=f"Field '{field}' was not part of the submission",
    )


def upload_rejected(code: int, message: str) -> AppError:
    return AppError(
        code=ErrorCode.UPLOAD_REJECTED,
        reason=str(ErrorReason.UPLOAD_REJECTED.value),
        status_code=http_status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"upload_code": int(code), "upload_message": message},
        message=message,
    )


def invalid_upload_name(name: str) -> AppError:
    return AppError(
        code=ErrorCode.VALIDATION_ERROR,
        reason=str(ErrorReason.INVALID_INPUT.value),
        status_code=http_status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"name": name},
        message="Upload name must be a plain file name",
    )
