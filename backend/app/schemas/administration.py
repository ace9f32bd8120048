from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import AcronymFields, DesignationFields, DesignationRead, ReadModel


class CountryCreate(DesignationFields):
    pass


class CountryRead(DesignationRead):
    pass


class StateCreate(BaseModel):
    code: Optional[int] = None
    designation_ar: Optional[str] = Field(None, max_length=200)
    designation_lt: Optional[str] = Field(None, max_length=200)


class StateRead(ReadModel):
    id: int
    code: Optional[int] = None
    designation_ar: Optional[str] = None
    designation_lt: Optional[str] = None


class StructureTypeCreate(DesignationFields):
    pass


class StructureTypeRead(DesignationRead):
    pass


class StructureCreate(DesignationFields, AcronymFields):
    structure_type_id: Optional[int] = None
    structure_up_id: Optional[int] = None


class StructureRead(DesignationRead):
    acronym_ar: Optional[str] = None
    acronym_en: Optional[str] = None
    acronym_fr: Optional[str] = None
    structure_type_id: Optional[int] = None
    structure_up_id: Optional[int] = None

    structure_type: Optional[StructureTypeRead] = None
    structure_up: Optional[DesignationRead] = None
