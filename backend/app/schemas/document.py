from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import DesignationFields, DesignationRead, ReadModel
from app.schemas.files import FileRead


class DocumentTypeCreate(DesignationFields):
    scope: Optional[int] = None


class DocumentTypeRead(DesignationRead):
    scope: Optional[int] = None


class DocumentCreate(BaseModel):
    reference: Optional[str] = Field(None, max_length=100)
    issue_date: Optional[date] = None
    document_type_id: Optional[int] = None
    file_id: Optional[int] = None


class DocumentRead(ReadModel):
    id: int
    reference: Optional[str] = None
    issue_date: Optional[date] = None
    document_type_id: Optional[int] = None
    file_id: Optional[int] = None

    document_type: Optional[DocumentTypeRead] = None
    file: Optional[FileRead] = None
