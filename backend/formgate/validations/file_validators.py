"""
file_validators.py
- Purpose: Centralized checks for the upload gate (type, size, transport).
- Design: Each check returns an UploadFailure or None; the gate short-circuits
  on the first failure. Nothing here touches the filesystem.
"""

from formgate.core import UploadErrorCode, UploadErrorMessage
from formgate.uploads.types import GateState, UploadFailure, UploadPolicy, UploadRequest


def extract_extension(file_name: str) -> str:
    """Text after the last ".". A name without a dot is its own extension."""
    return file_name.rsplit(".", 1)[-1]


def client_basename(file_name: str | None) -> str:
    """Last path segment of a client-supplied name, for either separator."""
    return (file_name or "").replace("\\", "/").rsplit("/", 1)[-1]


def is_safe_name(name: str) -> bool:
    # A stored name must stay a single entry inside the save directory
    if "/" in name or "\\" in name or "\x00" in name:
        return False
    return name not in (".", "..")


def validate_type(request: UploadRequest, policy: UploadPolicy) -> UploadFailure | None:
    # Exact, case-sensitive match on declared MIME or extension
    if not policy.allowed_types:
        return None

    extension = extract_extension(request.file_name)
    if request.declared_mime in policy.allowed_types or extension in policy.allowed_types:
        return None

    return UploadFailure(
        code=UploadErrorCode.TYPE_NOT_ALLOWED,
        message=UploadErrorMessage.TYPE_NOT_ALLOWED.value,
        state=GateState.START,
    )


def validate_size(request: UploadRequest, policy: UploadPolicy) -> UploadFailure | None:
    if policy.max_size_kb == 0:
        return None

    size_kb = request.declared_size / 1024
    if size_kb <= policy.max_size_kb:
        return None

    return UploadFailure(
        code=UploadErrorCode.SIZE_EXCEEDED,
        message=UploadErrorMessage.SIZE_EXCEEDED.value,
        state=GateState.TYPE_OK,
    )


def validate_transport(request: UploadRequest) -> UploadFailure | None:
    if request.error > 0:
        return UploadFailure(
            code=request.error,
            message=UploadErrorMessage.TRANSPORT.value,
            state=GateState.SIZE_OK,
        )
    return None
