"""
error_reasons.py
- Purpose: Human-friendly "reason" strings.
- Keep these stable; they may be surfaced in UI next to form fields.
"""

from enum import Enum


class ErrorReason(str, Enum):
    INVALID_INPUT = "Invalid input"
    FIELD_NOT_SUBMITTED = "Field was not part of the submission"
    UPLOAD_REJECTED = "Upload rejected"
    UNHANDLED = "Unhandled exception"


class UploadErrorMessage(str, Enum):
    TYPE_NOT_ALLOWED = "File type not allowed"
    SIZE_EXCEEDED = "File size exceeds maximum allowed size"
    FILE_EXISTS = "File exists"
    MOVE_FAILED = "Unable to move uploaded file from temp directory. Check permissions."
    NO_UPLOAD = "No upload data received"
    TRANSPORT = "Upload error"
