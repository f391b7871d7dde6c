# formgate/core/error_codes.py
from enum import Enum, IntEnum

class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Forms
    FIELD_NOT_SUBMITTED = "FIELD_NOT_SUBMITTED"

    # Uploads
    UPLOAD_REJECTED = "UPLOAD_REJECTED"


class UploadErrorCode(IntEnum):
    """Numeric rejection codes reported by the upload gate."""

    TYPE_NOT_ALLOWED = 101
    SIZE_EXCEEDED = 102
    FILE_EXISTS = 103
    MOVE_FAILED = 104
    NO_UPLOAD = 105
