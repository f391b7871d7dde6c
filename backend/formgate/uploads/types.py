"""formgate/uploads/types.py

Dataclasses describing one pass through the upload gate.
Design goals:
- the transport layer hands over a fully materialized file descriptor
- a policy is immutable and safe to share between concurrent uploads
- an outcome holds exactly one of success / failure
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from formgate.core.config import Settings, settings as default_settings


class GateState(str, Enum):
    START = "START"
    TYPE_OK = "TYPE_OK"
    SIZE_OK = "SIZE_OK"
    TRANSPORT_OK = "TRANSPORT_OK"
    NAME_RESOLVED = "NAME_RESOLVED"
    COLLISION_OK = "COLLISION_OK"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class UploadRequest:
    input_name: str
    file_name: str
    tmp_location: str
    declared_size: int  # bytes
    declared_mime: str
    error: int = 0      # transport error code, 0 = ok


@dataclass(frozen=True)
class UploadPolicy:
    allowed_types: frozenset[str] = field(default_factory=frozenset)
    max_size_kb: int = 2048  # 0 = unlimited
    overwrite_allowed: bool = False
    save_path: str = "./"
    input_name: str = "file"

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> "UploadPolicy":
        s = s or default_settings
        return cls(
            allowed_types=frozenset(s.upload_allowed_types),
            max_size_kb=s.UPLOAD_MAX_SIZE,
            overwrite_allowed=s.UPLOAD_OVERWRITE,
            save_path=s.UPLOAD_PATH,
            input_name=s.UPLOAD_INPUT_NAME,
        )


@dataclass(frozen=True)
class UploadSuccess:
    original_name: str
    stored_name: str
    extension: str
    size: int
    mime: str


@dataclass(frozen=True)
class UploadFailure:
    code: int
    message: str
    state: GateState = GateState.START  # last state reached before rejection


@dataclass(frozen=True)
class UploadOutcome:
    success: UploadSuccess | None = None
    failure: UploadFailure | None = None

    def __post_init__(self) -> None:
        if (self.success is None) == (self.failure is None):
            raise ValueError("UploadOutcome needs exactly one of success or failure")

    @classmethod
    def admitted(cls, success: UploadSuccess) -> "UploadOutcome":
        return cls(success=success)

    @classmethod
    def rejected(cls, failure: UploadFailure) -> "UploadOutcome":
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.success is not None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def state(self) -> GateState:
        return GateState.COMMITTED if self.ok else GateState.REJECTED

    def error_pair(self) -> tuple[int, str]:
        if self.failure is None:
            return (0, "")
        return (self.failure.code, self.failure.message)

    def details(self) -> dict[str, Any]:
        return asdict(self.success) if self.success else {}
