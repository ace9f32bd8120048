from __future__ import annotations

import logging
import uuid
from pathlib import Path

from app.config import settings
from app.core.errors import FileStorageError

logger = logging.getLogger("raas")


def storage_root() -> Path:
    """Return the absolute storage root for this backend instance."""

    root = Path(settings.storage_dir)
    if root.is_absolute():
        return root

    # backend/app/services/... -> backend/
    backend_root = Path(__file__).resolve().parents[2]
    return (backend_root / root).resolve()


class FileStore:
    """Bytes on local disk under a random name; callers keep only the relative path."""

    def __init__(self, root: Path | None = None, folder: str = "files"):
        self.root = (root or storage_root()).resolve()
        self.folder = folder

    def _resolve(self, relative_path: str) -> Path:
        target = (self.root / relative_path).resolve()
        # Require it to be under the root to prevent path traversal.
        if not target.is_relative_to(self.root):
            raise FileStorageError("Invalid storage path")
        return target

    def store(self, content: bytes, extension: str | None = None) -> str:
        suffix = f".{extension}" if extension else ""
        relative = f"{self.folder}/{uuid.uuid4().hex}{suffix}"
        target = self._resolve(relative)
        tmp_path = target.with_suffix(target.suffix + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(content)
            tmp_path.replace(target)
        except OSError as e:
            logger.error("file_store_failed", extra={"path": relative, "error": str(e)})
            tmp_path.unlink(missing_ok=True)
            raise FileStorageError("Could not store file") from e
        return relative

    def retrieve(self, relative_path: str) -> bytes:
        target = self._resolve(relative_path)
        try:
            return target.read_bytes()
        except FileNotFoundError as e:
            raise FileStorageError("Stored file content is missing") from e
        except OSError as e:
            logger.error("file_read_failed", extra={"path": relative_path, "error": str(e)})
            raise FileStorageError("Could not read file") from e

    def delete(self, relative_path: str) -> None:
        target = self._resolve(relative_path)
        try:
            target.unlink(missing_ok=True)
        except OSError as e:
            logger.error("file_delete_failed", extra={"path": relative_path, "error": str(e)})
            raise FileStorageError("Could not delete file") from e
