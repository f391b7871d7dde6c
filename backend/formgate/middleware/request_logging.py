from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from formgate.core.request_context import clear_context, set_context


logger = logging.getLogger("formgate.http")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One log line per request, tagged with request_id. Upload routes leave the
    slot and gate code on request.state; they are added when present.
    """

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex
        set_context(request_id=rid)

        t0 = time.perf_counter()
        try:
            response = await call_next(request)

            extra = {
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - t0) * 1000, 1),
            }
            upload_code = getattr(request.state, "upload_code", None)
            if upload_code is not None:
                extra["upload_slot"] = getattr(request.state, "upload_slot", None)
                extra["upload_code"] = upload_code

            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(level, "http.request", extra=extra)

            response.headers["x-request-id"] = rid
            return response
        finally:
            clear_context()
