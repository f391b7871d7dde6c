# formgate/core/__init__.py
from formgate.core.errors import AppError
from formgate.core.error_codes import ErrorCode, UploadErrorCode
from formgate.core.error_reasons import ErrorReason, UploadErrorMessage

__all__ = ["AppError", "ErrorCode", "UploadErrorCode", "ErrorReason", "UploadErrorMessage"]
