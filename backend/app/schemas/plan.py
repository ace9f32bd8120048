from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.administration import StructureRead
from app.schemas.common import AcronymFields, DesignationFields, DesignationRead, ReadModel
from app.schemas.document import DocumentRead


class BudgetTypeCreate(DesignationFields, AcronymFields):
    pass


class BudgetTypeRead(DesignationRead):
    acronym_ar: Optional[str] = None
    acronym_en: Optional[str] = None
    acronym_fr: Optional[str] = None


class DomainCreate(DesignationFields):
    pass


class DomainRead(DesignationRead):
    pass


class RubricCreate(DesignationFields):
    domain_id: Optional[int] = None


class RubricRead(DesignationRead):
    domain_id: Optional[int] = None

    domain: Optional[DomainRead] = None


class ItemCreate(DesignationFields):
    rubric_id: Optional[int] = None


class ItemRead(DesignationRead):
    rubric_id: Optional[int] = None

    rubric: Optional[RubricRead] = None


class ItemStatusCreate(DesignationFields):
    pass


class ItemStatusRead(DesignationRead):
    pass


class FinancialOperationCreate(BaseModel):
    operation: Optional[str] = Field(None, max_length=200)
    budget_year: Optional[str] = Field(None, max_length=4)
    budget_type_id: Optional[int] = None


class FinancialOperationRead(ReadModel):
    id: int
    operation: Optional[str] = None
    budget_year: Optional[str] = None
    budget_type_id: Optional[int] = None

    budget_type: Optional[BudgetTypeRead] = None


class BudgetModificationCreate(BaseModel):
    object: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=500)
    approval_date: Optional[date] = None
    demande_id: Optional[int] = None
    response_id: Optional[int] = None


class BudgetModificationRead(ReadModel):
    id: int
    object: Optional[str] = None
    description: Optional[str] = None
    approval_date: Optional[date] = None
    demande_id: Optional[int] = None
    response_id: Optional[int] = None

    demande: Optional[DocumentRead] = None
    response: Optional[DocumentRead] = None


class PlannedItemCreate(BaseModel):
    designation: Optional[str] = Field(None, max_length=200)
    unitair_cost: Optional[float] = Field(None, gt=0)
    planed_quantity: Optional[float] = Field(None, gt=0)
    allocated_amount: Optional[float] = Field(None, ge=0)
    item_status_id: Optional[int] = None
    item_id: Optional[int] = None
    financial_operation_id: Optional[int] = None
    budget_modification_id: Optional[int] = None


class PlannedItemRead(ReadModel):
    id: int
    designation: Optional[str] = None
    unitair_cost: Optional[float] = None
    planed_quantity: Optional[float] = None
    allocated_amount: Optional[float] = None
    item_status_id: Optional[int] = None
    item_id: Optional[int] = None
    financial_operation_id: Optional[int] = None
    budget_modification_id: Optional[int] = None
    distributed_quantity: Optional[float] = None

    item_status: Optional[ItemStatusRead] = None
    item: Optional[ItemRead] = None
    financial_operation: Optional[FinancialOperationRead] = None
    budget_modification: Optional[BudgetModificationRead] = None


class ItemDistributionCreate(BaseModel):
    quantity: Optional[float] = Field(None, gt=0)
    planned_item_id: Optional[int] = None
    structure_id: Optional[int] = None


class ItemDistributionRead(ReadModel):
    id: int
    quantity: Optional[float] = None
    planned_item_id: Optional[int] = None
    structure_id: Optional[int] = None

    planned_item: Optional[PlannedItemRead] = None
    structure: Optional[StructureRead] = None
