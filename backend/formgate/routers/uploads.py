"""
uploads.py
- Purpose: API route for uploading a single file through the upload gate.
- Design: Keep router thin. The route only spools multipart parts to temp
  files (the transport side); the Uploader makes every decision.
"""

import os
import shutil
import tempfile

from fastapi import APIRouter, Depends, Request, status
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile as StarletteUploadFile

from formgate.api.deps import get_uploader
from formgate.core.errors import invalid_upload_name, upload_rejected
from formgate.schemas.uploads import UploadResponse
from formgate.services.uploader import Uploader
from formgate.uploads.types import UploadOutcome, UploadRequest
from formgate.validations.file_validators import client_basename, is_safe_name

router = APIRouter(prefix="/api/uploads", tags=["Uploads"])


def _spool(input_name: str, part: StarletteUploadFile) -> UploadRequest:
    with tempfile.NamedTemporaryFile(prefix="formgate-", delete=False) as tmp:
        shutil.copyfileobj(part.file, tmp)
        tmp_path = tmp.name

    return UploadRequest(
        input_name=input_name,
        file_name=client_basename(part.filename),
        tmp_location=tmp_path,
        declared_size=os.path.getsize(tmp_path),
        declared_mime=part.content_type or "",
    )


def _spool_and_admit(
    parts: list[tuple[str, StarletteUploadFile]],
    uploader: Uploader,
    name: str | None,
    keep_extension: bool,
) -> UploadOutcome:
    files: dict[str, UploadRequest] = {}
    try:
        for key, part in parts:
            if key not in files:
                files[key] = _spool(key, part)
        return uploader.upload(files, file_name=name, keep_extension=keep_extension)
    finally:
        # Whatever the gate did not move is transport garbage
        for spooled in files.values():
            if os.path.exists(spooled.tmp_location):
                os.remove(spooled.tmp_location)


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    request: Request,
    name: str | None = None,
    keep_extension: bool = True,
    uploader: Uploader = Depends(get_uploader),
):
    if name and not is_safe_name(name):
        raise invalid_upload_name(name)

    form = await request.form()
    try:
        parts = [
            (key, part) for key, part in form.multi_items() if isinstance(part, StarletteUploadFile)
        ]
        outcome = await run_in_threadpool(_spool_and_admit, parts, uploader, name, keep_extension)
    finally:
        await form.close()

    code, message = outcome.error_pair()
    # read back by the request logging middleware
    request.state.upload_slot = uploader.policy.input_name
    request.state.upload_code = code
    if not outcome.ok:
        raise upload_rejected(code, message)

    return UploadResponse.from_success(outcome.success)
