from typing import Optional

from pydantic import Field

from app.schemas.common import DesignationFields, DesignationRead


class CurrencyCreate(DesignationFields):
    code_ar: Optional[str] = Field(None, max_length=10)
    code_lt: Optional[str] = Field(None, max_length=10)


class CurrencyRead(DesignationRead):
    code_ar: Optional[str] = None
    code_lt: Optional[str] = None


class ApprovalStatusCreate(DesignationFields):
    pass


class ApprovalStatusRead(DesignationRead):
    pass


class RealizationStatusCreate(DesignationFields):
    pass


class RealizationStatusRead(DesignationRead):
    pass


class RealizationNatureCreate(DesignationFields):
    pass


class RealizationNatureRead(DesignationRead):
    pass


class RealizationDirectorCreate(DesignationFields):
    pass


class RealizationDirectorRead(DesignationRead):
    pass
