# formgate/services/uploader.py
"""
uploader.py
- Purpose: The upload gate. Admits or rejects one incoming file and moves it
  into the upload directory only when every check passes.
- Order: presence -> type -> size -> transport -> collision -> move.
- Design: Rejections are returned as data (UploadOutcome), never raised.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import replace

from formgate.core import UploadErrorCode, UploadErrorMessage
from formgate.core.errors import invalid_upload_name
from formgate.core.request_context import set_context
from formgate.services.storage.local_storage import LocalStorage, StorageError
from formgate.uploads.types import (
    GateState,
    UploadFailure,
    UploadOutcome,
    UploadPolicy,
    UploadRequest,
    UploadSuccess,
)
from formgate.validations.file_validators import (
    extract_extension,
    is_safe_name,
    validate_size,
    validate_transport,
    validate_type,
)

logger = logging.getLogger("formgate.uploads")


class Uploader:
    def __init__(self, policy: UploadPolicy | None = None, storage: LocalStorage | None = None):
        self.policy = policy or UploadPolicy.from_settings()
        self.storage = storage or LocalStorage()
        self._last_outcome: UploadOutcome | None = None

    # ---- policy overrides (each replaces the frozen policy) ----

    def set_allowed_types(self, allowed_types) -> None:
        self.policy = replace(self.policy, allowed_types=frozenset(allowed_types))

    def set_max_size(self, max_size_kb: int) -> None:
        self.policy = replace(self.policy, max_size_kb=max_size_kb)

    def set_save_path(self, save_path: str) -> None:
        self.policy = replace(self.policy, save_path=save_path)

    def set_input_name(self, input_name: str) -> None:
        self.policy = replace(self.policy, input_name=input_name)

    def set_overwrite(self, overwrite_allowed: bool) -> None:
        self.policy = replace(self.policy, overwrite_allowed=overwrite_allowed)

    # ---- results of the last call ----

    def get_last_error(self) -> tuple[int, str]:
        """(code, message) of the last rejection, (0, "") otherwise."""
        if self._last_outcome is None:
            return (0, "")
        return self._last_outcome.error_pair()

    def get_upload_details(self) -> dict:
        if self._last_outcome is None:
            return {}
        return self._last_outcome.details()

    # ---- the gate ----

    def upload(
        self,
        files: Mapping[str, UploadRequest],
        file_name: str | None = None,
        keep_extension: bool = True,
    ) -> UploadOutcome:
        """
        Run the gate against the descriptor in ``files[policy.input_name]``.

        file_name: stored name; empty/None keeps the original file name.
        keep_extension: append the original extension to the stored name.

        The collision check looks at the chosen name before the extension is
        appended. With overwrite disabled and keep_extension on, an existing
        "photo.pdf" is therefore replaced by an upload named "photo" (and
        "report.pdf.pdf" by a plain "report.pdf" upload).

        Raises AppError when the chosen name is not a plain file name
        (separators, "." or ".."); that is caller misuse, not a rejection.
        """
        self._last_outcome = None
        policy = self.policy

        request = files.get(policy.input_name)
        if request is None:
            return self._reject(
                UploadFailure(
                    code=UploadErrorCode.NO_UPLOAD,
                    message=UploadErrorMessage.NO_UPLOAD.value,
                    state=GateState.START,
                )
            )

        set_context(upload_slot=request.input_name)

        failure = validate_type(request, policy)
        if failure:
            return self._reject(failure, request)
        self._trace(GateState.TYPE_OK, request)

        failure = validate_size(request, policy)
        if failure:
            return self._reject(failure, request)
        self._trace(GateState.SIZE_OK, request)

        failure = validate_transport(request)
        if failure:
            return self._reject(failure, request)
        self._trace(GateState.TRANSPORT_OK, request)

        chosen = file_name or request.file_name
        if not is_safe_name(chosen):
            raise invalid_upload_name(chosen)
        self._trace(GateState.NAME_RESOLVED, request)

        # Collision is checked on the chosen name, before the extension is appended
        if not policy.overwrite_allowed and self.storage.exists(os.path.join(policy.save_path, chosen)):
            return self._reject(
                UploadFailure(
                    code=UploadErrorCode.FILE_EXISTS,
                    message=UploadErrorMessage.FILE_EXISTS.value,
                    state=GateState.NAME_RESOLVED,
                ),
                request,
            )
        self._trace(GateState.COLLISION_OK, request)

        extension = extract_extension(request.file_name)
        stored_name = f"{chosen}.{extension}" if keep_extension else chosen

        try:
            self.storage.move(request.tmp_location, os.path.join(policy.save_path, stored_name))
        except StorageError:
            logger.warning(
                "upload.move_failed",
                exc_info=True,
                extra={"file_name": request.file_name, "stored_name": stored_name},
            )
            return self._reject(
                UploadFailure(
                    code=UploadErrorCode.MOVE_FAILED,
                    message=UploadErrorMessage.MOVE_FAILED.value,
                    state=GateState.COLLISION_OK,
                ),
                request,
            )

        outcome = UploadOutcome.admitted(
            UploadSuccess(
                original_name=request.file_name,
                stored_name=stored_name,
                extension=extension,
                size=request.declared_size,
                mime=request.declared_mime,
            )
        )
        self._last_outcome = outcome
        logger.info(
            "upload.committed",
            extra={
                "file_name": request.file_name,
                "stored_name": stored_name,
                "size": request.declared_size,
                "mime": request.declared_mime,
            },
        )
        return outcome

    def _trace(self, state: GateState, request: UploadRequest) -> None:
        logger.debug("upload.state", extra={"state": state.value, "file_name": request.file_name})

    def _reject(self, failure: UploadFailure, request: UploadRequest | None = None) -> UploadOutcome:
        outcome = UploadOutcome.rejected(failure)
        self._last_outcome = outcome
        logger.info(
            "upload.rejected",
            extra={
                "code": int(failure.code),
                "reason": failure.message,
                "state": failure.state.value,
                "file_name": request.file_name if request else None,
                "input_name": request.input_name if request else self.policy.input_name,
            },
        )
        return outcome
