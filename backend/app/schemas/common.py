from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    content: List[T]
    total_elements: int
    total_pages: int
    page: int
    size: int


class PageRequest(BaseModel):
    page: int = Field(0, ge=0)
    size: int = Field(20, ge=1)
    sort_by: Optional[str] = None
    sort_dir: str = Field("asc", pattern="^(asc|desc|ASC|DESC)$")

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def descending(self) -> bool:
        return self.sort_dir.lower() == "desc"


class ErrorResponse(BaseModel):
    errorCode: str
    message: str
    path: str
    timestamp: datetime
    details: Optional[Dict[str, Any]] = None


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class DesignationFields(BaseModel):
    designation_ar: Optional[str] = Field(None, max_length=200)
    designation_en: Optional[str] = Field(None, max_length=200)
    designation_fr: Optional[str] = Field(None, max_length=200)


class AcronymFields(BaseModel):
    acronym_ar: Optional[str] = Field(None, max_length=50)
    acronym_en: Optional[str] = Field(None, max_length=50)
    acronym_fr: Optional[str] = Field(None, max_length=50)


class DesignationRead(ReadModel):
    id: int
    designation_ar: Optional[str] = None
    designation_en: Optional[str] = None
    designation_fr: Optional[str] = None


class CountRead(BaseModel):
    count: int
