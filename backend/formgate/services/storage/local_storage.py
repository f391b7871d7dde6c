"""
local_storage.py
- Purpose: Storage adapter for the local upload directory.
- Owns: existence checks and moving spooled uploads into place.
- Design: Treat as an infrastructure adapter; no business logic.
"""

import os
import shutil


class StorageError(Exception):
    """Raised when a file cannot be moved into the upload directory."""


class LocalStorage:
    """
    Minimal adapter around the local filesystem.

    Assumptions:
    - The destination directory already exists (it is never created here)
    - A move either fully succeeds or raises; the source is left as-is on failure
    """

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def move(self, src: str, dst: str) -> str:
        if not os.path.isfile(src):
            raise StorageError(f"Temporary upload not found: {src}")
        if not os.path.isdir(os.path.dirname(dst) or "."):
            raise StorageError(f"Destination directory does not exist: {dst}")

        try:
            return shutil.move(src, dst)
        except OSError as e:
            raise StorageError(f"Failed to move {src} -> {dst}: {e}") from e
