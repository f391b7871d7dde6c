import json
import logging

from formgate.core.logging_config import EventFormatter, JsonFormatter
from formgate.core.request_context import clear_context, set_context


def _record(**extra):
    record = logging.LogRecord("formgate.uploads", logging.INFO, __file__, 1, "upload.rejected", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_json_formatter_includes_context_and_extra():
    set_context(request_id="rid-1", upload_slot="file")
    try:
        out = json.loads(JsonFormatter().format(_record(code=101, blob=object())))
    finally:
        clear_context()

    assert out["msg"] == "upload.rejected"
    assert out["logger"] == "formgate.uploads"
    assert out["request_id"] == "rid-1"
    assert out["upload_slot"] == "file"
    assert out["code"] == 101
    assert isinstance(out["blob"], str)


def test_clear_context_drops_ids():
    set_context(request_id="rid-2")
    clear_context()

    out = json.loads(JsonFormatter().format(_record()))

    assert "request_id" not in out


def test_none_extras_are_dropped():
    out = json.loads(JsonFormatter().format(_record(upload_code=None, field="email")))

    assert "upload_code" not in out
    assert out["field"] == "email"


def test_event_formatter_renders_key_values():
    set_context(request_id="rid-3")
    try:
        line = EventFormatter().format(_record(code=103, state="NAME_RESOLVED"))
    finally:
        clear_context()

    assert line.startswith("INFO formgate.uploads upload.rejected")
    assert "request_id=rid-3" in line
    assert "code=103" in line
    assert "state=NAME_RESOLVED" in line
