import logging
from pathlib import PurePath
from typing import Any, Dict, Optional

from app import models
from app.core.errors import FileStorageError
from app.schemas.files import FileRead
from app.services.audit import audited
from app.services.crud import CrudService, Dependent
from app.services.storage import FileStore

logger = logging.getLogger("raas")

FILE_TYPES = {
    "pdf": "PDF",
    "doc": "WORD",
    "docx": "WORD",
    "xls": "EXCEL",
    "xlsx": "EXCEL",
    "png": "IMAGE",
    "jpg": "IMAGE",
    "jpeg": "IMAGE",
    "gif": "IMAGE",
}


def detect_file_type(extension: Optional[str]) -> str:
    return FILE_TYPES.get((extension or "").lower(), "OTHER")


def extension_of(filename: Optional[str]) -> Optional[str]:
    suffix = PurePath(filename or "").suffix.lstrip(".").lower()
    return suffix[:20] or None


class FileService(CrudService):
    model = models.File
    read_schema = FileRead
    entity_name = "File"
    label = "File"
    module = "utility"
    fields = ()
    required = {}
    unique = ()
    search_fields = ("original_name", "extension", "file_type")
    order_by = "id"
    dependents = (
        Dependent(models.Document, "file_id", "Cannot delete file as it is used by documents"),
        Dependent(models.Mail, "file_id", "Cannot delete file as it is used by mails"),
        Dependent(models.Provider, "logo_id", "Cannot delete file as it is used as a provider logo"),
        Dependent(
            models.Submission,
            "administrative_part_id",
            "Cannot delete file as it is used by submissions",
        ),
        Dependent(
            models.Submission, "technical_part_id", "Cannot delete file as it is used by submissions"
        ),
        Dependent(
            models.Submission, "financial_part_id", "Cannot delete file as it is used by submissions"
        ),
    )

    def __init__(self, db, actor=None, store: Optional[FileStore] = None):
        super().__init__(db, actor)
        self.store = store or FileStore()

    @audited(models.AuditAction.CREATE, method_name="upload")
    def upload(
        self,
        filename: Optional[str],
        content: bytes,
        content_type: Optional[str] = None,
        file_type: Optional[str] = None,
    ) -> FileRead:
        extension = extension_of(filename)
        path = self.store.store(content, extension)
        entity = models.File(
            extension=extension,
            size=len(content),
            path=path,
            file_type=file_type or detect_file_type(extension),
            original_name=PurePath(filename).name if filename else None,
            content_type=content_type,
        )
        self.db.add(entity)
        try:
            self._commit()
        except Exception:
            self.store.delete(path)
            raise
        self.db.refresh(entity)
        return self.to_read(entity)

    def content(self, file_id: int) -> tuple[models.File, bytes]:
        entity = self.get_entity(file_id)
        return entity, self.store.retrieve(entity.path)

    def after_delete(self, values: Dict[str, Any]) -> None:
        if not values.get("path"):
            return
        # the row is already gone; leftover bytes are only logged
        try:
            self.store.delete(values["path"])
        except FileStorageError as e:
            logger.warning(
                "file_bytes_delete_failed",
                extra={"file_id": values.get("id"), "path": values["path"], "error": e.message},
            )
