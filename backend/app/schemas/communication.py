from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.administration import StructureRead
from app.schemas.common import DesignationFields, DesignationRead, ReadModel
from app.schemas.files import FileRead


class MailNatureCreate(DesignationFields):
    pass


class MailNatureRead(DesignationRead):
    pass


class MailTypeCreate(DesignationFields):
    pass


class MailTypeRead(DesignationRead):
    pass


class MailCreate(BaseModel):
    reference: Optional[str] = Field(None, max_length=100)
    record_number: Optional[str] = Field(None, max_length=100)
    subject: Optional[str] = Field(None, max_length=500)
    mail_date: Optional[date] = None
    record_date: Optional[date] = None
    mail_nature_id: Optional[int] = None
    mail_type_id: Optional[int] = None
    structure_id: Optional[int] = None
    file_id: Optional[int] = None
    referenced_mail_ids: Optional[List[int]] = None


class MailRead(ReadModel):
    id: int
    reference: Optional[str] = None
    record_number: Optional[str] = None
    subject: Optional[str] = None
    mail_date: Optional[date] = None
    record_date: Optional[date] = None
    mail_nature_id: Optional[int] = None
    mail_type_id: Optional[int] = None
    structure_id: Optional[int] = None
    file_id: Optional[int] = None
    referenced_mail_ids: List[int] = []

    mail_nature: Optional[MailNatureRead] = None
    mail_type: Optional[MailTypeRead] = None
    structure: Optional[StructureRead] = None
    file: Optional[FileRead] = None
