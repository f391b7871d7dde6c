from formgate.services.storage.local_storage import LocalStorage
from formgate.services.uploader import Uploader
from formgate.uploads.types import UploadPolicy
from formgate.validations.form_validator import FormValidator


def get_storage() -> LocalStorage:
    """
    Provides the storage adapter.
    Using Depends(get_storage) allows for easy swapping in tests.
    """
    return LocalStorage()


def get_upload_policy() -> UploadPolicy:
    return UploadPolicy.from_settings()


def get_uploader() -> Uploader:
    """
    A fresh gate per request; the policy comes from settings.
    Tests override this dependency to point at a temp directory.
    """
    return Uploader(policy=get_upload_policy(), storage=get_storage())


def get_form_validator() -> FormValidator:
    return FormValidator()
