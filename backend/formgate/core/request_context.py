"""
Request context helpers.

We keep a small context (request_id, upload_slot) in ContextVars.
The HTTP middleware and the upload route set these values so gate decisions
can be correlated with the request that triggered them.

No external dependencies.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Any, Dict, Optional


_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
_upload_slot: ContextVar[Optional[str]] = ContextVar("upload_slot", default=None)


def set_context(
    *,
    request_id: Optional[str] = None,
    upload_slot: Optional[str] = None,
) -> None:
    if request_id is not None:
        _request_id.set(request_id)
    if upload_slot is not None:
        _upload_slot.set(upload_slot)


def clear_context() -> None:
    _request_id.set(None)
    _upload_slot.set(None)


def get_context() -> Dict[str, Any]:
    ctx: Dict[str, Any] = {}
    rid = _request_id.get()
    slot = _upload_slot.get()

    if rid:
        ctx["request_id"] = rid
    if slot:
        ctx["upload_slot"] = slot
    return ctx
