"""
uploads.py (schemas)
- Purpose: Response DTO for an admitted upload.
"""

from pydantic import BaseModel

from formgate.uploads.types import UploadSuccess


class UploadResponse(BaseModel):
    original_name: str
    stored_name: str
    extension: str
    size: int
    mime: str

    @classmethod
    def from_success(cls, success: UploadSuccess) -> "UploadResponse":
        return cls(
            original_name=success.original_name,
            stored_name=success.stored_name,
            extension=success.extension,
            size=success.size,
            mime=success.mime,
        )
