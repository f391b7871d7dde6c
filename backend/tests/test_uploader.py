import itertools
import os

import pytest

from formgate.core import AppError, ErrorCode, UploadErrorCode
from formgate.services.storage.local_storage import LocalStorage, StorageError
from formgate.services.uploader import Uploader
from formgate.uploads.types import (
    GateState,
    UploadFailure,
    UploadOutcome,
    UploadPolicy,
    UploadRequest,
    UploadSuccess,
)


@pytest.fixture
def save_dir(tmp_path):
    d = tmp_path / "uploads"
    d.mkdir()
    return d


@pytest.fixture
def spool(tmp_path):
    spool_dir = tmp_path / "spool"
    spool_dir.mkdir()
    counter = itertools.count()

    def _make(file_name="report.pdf", content=b"%PDF-1.4", mime="application/pdf", size=None, error=0):
        tmp = spool_dir / f"upload{next(counter)}.tmp"
        tmp.write_bytes(content)
        return UploadRequest(
            input_name="file",
            file_name=file_name,
            tmp_location=str(tmp),
            declared_size=len(content) if size is None else size,
            declared_mime=mime,
            error=error,
        )

    return _make


@pytest.fixture
def uploader(save_dir):
    return Uploader(policy=UploadPolicy(save_path=str(save_dir), max_size_kb=2048))


def test_missing_slot_is_rejected(uploader, spool):
    outcome = uploader.upload({"attachment": spool()})

    assert not outcome
    assert outcome.error_pair() == (105, "No upload data received")
    assert uploader.get_last_error() == (105, "No upload data received")
    assert uploader.get_upload_details() == {}


def test_allowed_extension_is_admitted(uploader, spool, save_dir):
    uploader.set_allowed_types(["pdf"])

    outcome = uploader.upload({"file": spool("x.pdf")})

    assert outcome.ok
    assert outcome.state == GateState.COMMITTED
    assert (save_dir / "x.pdf.pdf").exists()


def test_allowed_mime_is_admitted(uploader, spool):
    uploader.set_allowed_types(["application/pdf"])

    assert uploader.upload({"file": spool("scan.bin")})


def test_disallowed_type_is_rejected(uploader, spool, save_dir):
    uploader.set_allowed_types(["pdf"])
    req = spool("x.exe", mime="application/octet-stream")

    outcome = uploader.upload({"file": req})

    assert outcome.failure.code == UploadErrorCode.TYPE_NOT_ALLOWED
    assert outcome.failure.message == "File type not allowed"
    assert list(save_dir.iterdir()) == []


def test_type_match_is_case_sensitive(uploader, spool):
    uploader.set_allowed_types(["pdf"])

    outcome = uploader.upload({"file": spool("X.PDF", mime="application/x-pdf")})

    assert outcome.failure.code == 101


def test_size_limit_boundary(uploader, spool):
    uploader.set_max_size(100)

    assert uploader.upload({"file": spool("a.txt", size=102400)}).ok

    outcome = uploader.upload({"file": spool("b.txt", size=102401)})
    assert outcome.error_pair() == (102, "File size exceeds maximum allowed size")
    assert outcome.failure.state == GateState.TYPE_OK


def test_zero_max_size_is_unlimited(uploader, spool):
    uploader.set_max_size(0)

    assert uploader.upload({"file": spool("huge.iso", size=10 * 1024 ** 3)}).ok


def test_type_is_checked_before_size(uploader, spool):
    uploader.set_allowed_types(["pdf"])
    uploader.set_max_size(1)

    outcome = uploader.upload({"file": spool("big.exe", size=999999)})

    assert outcome.failure.code == 101


def test_transport_error_is_passed_through(uploader, spool):
    outcome = uploader.upload({"file": spool(error=3)})

    assert outcome.error_pair() == (3, "Upload error")
    assert outcome.failure.state == GateState.SIZE_OK


def test_collision_is_rejected_without_touching_existing(uploader, spool, save_dir):
    existing = save_dir / "report.pdf"
    existing.write_bytes(b"original")
    req = spool("report.pdf")

    outcome = uploader.upload({"file": req})

    assert outcome.failure.code == UploadErrorCode.FILE_EXISTS
    assert existing.read_bytes() == b"original"
    assert sorted(p.name for p in save_dir.iterdir()) == ["report.pdf"]


def test_collision_checks_name_before_extension(uploader, spool, save_dir):
    (save_dir / "photo").write_bytes(b"old")

    outcome = uploader.upload({"file": spool("report.pdf")}, file_name="photo")

    assert outcome.failure.code == 103


def test_overwrite_allowed_replaces_file(uploader, spool, save_dir):
    uploader.set_overwrite(True)
    (save_dir / "photo.pdf").write_bytes(b"old")

    outcome = uploader.upload({"file": spool("report.pdf", content=b"new")}, file_name="photo")

    assert outcome.ok
    assert (save_dir / "photo.pdf").read_bytes() == b"new"


def test_override_name_keeps_original_extension(uploader, spool, save_dir):
    outcome = uploader.upload({"file": spool("report.pdf")}, file_name="photo")

    assert outcome.success == UploadSuccess(
        original_name="report.pdf",
        stored_name="photo.pdf",
        extension="pdf",
        size=8,
        mime="application/pdf",
    )
    assert (save_dir / "photo.pdf").read_bytes() == b"%PDF-1.4"
    assert uploader.get_upload_details()["stored_name"] == "photo.pdf"
    assert uploader.get_last_error() == (0, "")


def test_extension_is_text_after_last_dot(uploader, spool):
    outcome = uploader.upload({"file": spool("report.v2.tar.gz")})

    assert outcome.success.extension == "gz"
    assert outcome.success.stored_name.endswith(".gz")


def test_name_without_dot_is_its_own_extension(uploader, spool):
    outcome = uploader.upload({"file": spool("README")})

    assert outcome.success.extension == "README"
    assert outcome.success.stored_name == "README.README"


def test_keep_extension_false_uses_name_as_is(uploader, spool, save_dir):
    outcome = uploader.upload({"file": spool("report.pdf")}, file_name="final", keep_extension=False)

    assert outcome.success.stored_name == "final"
    assert (save_dir / "final").exists()


def test_empty_override_falls_back_to_original(uploader, spool):
    outcome = uploader.upload({"file": spool("report.pdf")}, file_name="", keep_extension=False)

    assert outcome.success.stored_name == "report.pdf"


def test_move_failure_leaves_temp_file(spool, tmp_path):
    uploader = Uploader(policy=UploadPolicy(save_path=str(tmp_path / "does-not-exist")))
    req = spool("report.pdf")

    outcome = uploader.upload({"file": req})

    assert outcome.error_pair() == (
        104,
        "Unable to move uploaded file from temp directory. Check permissions.",
    )
    assert outcome.failure.state == GateState.COLLISION_OK
    assert os.path.exists(req.tmp_location)


def test_custom_input_name(uploader, spool):
    uploader.set_input_name("avatar")

    assert uploader.upload({"avatar": spool("me.png", mime="image/png")}).ok
    assert uploader.upload({"file": spool("me.png")}).failure.code == 105


def test_setters_do_not_mutate_shared_policy(save_dir):
    policy = UploadPolicy(save_path=str(save_dir))
    uploader = Uploader(policy=policy)

    uploader.set_allowed_types(["pdf"])

    assert policy.allowed_types == frozenset()
    assert uploader.policy.allowed_types == frozenset({"pdf"})


def test_last_error_resets_on_each_call(uploader, spool):
    uploader.upload({})
    assert uploader.get_last_error()[0] == 105

    uploader.upload({"file": spool()})
    assert uploader.get_last_error() == (0, "")


def test_outcome_requires_exactly_one_side():
    with pytest.raises(ValueError):
        UploadOutcome()
    with pytest.raises(ValueError):
        UploadOutcome(
            success=UploadSuccess("a", "a", "a", 1, "x"),
            failure=UploadFailure(code=101, message="no"),
        )


def test_policy_from_settings(monkeypatch):
    from formgate.core.config import Settings

    monkeypatch.setenv("UPLOAD_ALLOWED_TYPES", "pdf, image/png")
    monkeypatch.setenv("UPLOAD_MAX_SIZE", "0")
    monkeypatch.setenv("UPLOAD_OVERWRITE", "true")

    policy = UploadPolicy.from_settings(Settings())

    assert policy.allowed_types == frozenset({"pdf", "image/png"})
    assert policy.max_size_kb == 0
    assert policy.overwrite_allowed is True
    assert policy.input_name == "file"


def test_local_storage_move_raises_storage_error(tmp_path):
    storage = LocalStorage()

    with pytest.raises(StorageError):
        storage.move(str(tmp_path / "nope.tmp"), str(tmp_path / "dest"))


def test_collision_check_misses_name_with_extension_appended(uploader, spool, save_dir):
    # overwrite is off, but only "report.pdf" is checked before storing "report.pdf.pdf"
    (save_dir / "report.pdf.pdf").write_bytes(b"old")
    (save_dir / "photo.pdf").write_bytes(b"old")

    first = uploader.upload({"file": spool("report.pdf", content=b"new")})
    second = uploader.upload({"file": spool("report.pdf", content=b"newer")}, file_name="photo")

    assert first.ok and second.ok
    assert (save_dir / "report.pdf.pdf").read_bytes() == b"new"
    assert (save_dir / "photo.pdf").read_bytes() == b"newer"


@pytest.mark.parametrize("name", ["../escaped", "a/b", "..", ".", "..\\x", "/abs"])
def test_unsafe_override_name_raises(uploader, spool, save_dir, name):
    req = spool("report.pdf")

    with pytest.raises(AppError) as exc:
        uploader.upload({"file": req}, file_name=name)

    assert exc.value.code == ErrorCode.VALIDATION_ERROR
    assert list(save_dir.iterdir()) == []
    assert os.path.exists(req.tmp_location)


def test_unsafe_original_name_raises(uploader, spool):
    with pytest.raises(AppError):
        uploader.upload({"file": spool("../report.pdf")})
