from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.common import DesignationFields, DesignationRead, ReadModel
from app.schemas.consultation import ConsultationRead
from app.schemas.core import ApprovalStatusRead, CurrencyRead, RealizationStatusRead
from app.schemas.provider import ProviderRead


class ContractTypeCreate(DesignationFields):
    pass


class ContractTypeRead(DesignationRead):
    pass


class ContractPhaseCreate(DesignationFields):
    pass


class ContractPhaseRead(DesignationRead):
    pass


class ContractStepCreate(DesignationFields):
    contract_phase_id: Optional[int] = None


class ContractStepRead(DesignationRead):
    contract_phase_id: Optional[int] = None

    contract_phase: Optional[ContractPhaseRead] = None


class ContractCreate(DesignationFields):
    internal_id: Optional[str] = Field(None, max_length=20)
    contract_year: Optional[int] = Field(None, ge=1900, le=2999)
    reference: Optional[str] = Field(None, max_length=100)
    amount: Optional[float] = Field(None, ge=0)
    transferable_amount: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    approval_reference: Optional[str] = Field(None, max_length=100)
    approval_date: Optional[date] = None
    contract_date: Optional[date] = None
    notify_date: Optional[date] = None
    contract_duration: Optional[str] = Field(None, max_length=50)
    observation: Optional[str] = None
    contract_type_id: Optional[int] = None
    provider_id: Optional[int] = None
    currency_id: Optional[int] = None
    realization_status_id: Optional[int] = None
    contract_step_id: Optional[int] = None
    approval_status_id: Optional[int] = None
    consultation_id: Optional[int] = None
    contract_up_id: Optional[int] = None
    document_ids: Optional[List[int]] = None
    referenced_mail_ids: Optional[List[int]] = None
    planned_item_ids: Optional[List[int]] = None


class ContractRead(DesignationRead):
    internal_id: Optional[str] = None
    contract_year: Optional[int] = None
    reference: Optional[str] = None
    amount: Optional[float] = None
    transferable_amount: Optional[float] = None
    start_date: Optional[date] = None
    approval_reference: Optional[str] = None
    approval_date: Optional[date] = None
    contract_date: Optional[date] = None
    notify_date: Optional[date] = None
    contract_duration: Optional[str] = None
    observation: Optional[str] = None
    contract_type_id: Optional[int] = None
    provider_id: Optional[int] = None
    currency_id: Optional[int] = None
    realization_status_id: Optional[int] = None
    contract_step_id: Optional[int] = None
    approval_status_id: Optional[int] = None
    consultation_id: Optional[int] = None
    contract_up_id: Optional[int] = None
    document_ids: List[int] = []
    referenced_mail_ids: List[int] = []
    planned_item_ids: List[int] = []

    contract_type: Optional[ContractTypeRead] = None
    provider: Optional[ProviderRead] = None
    currency: Optional[CurrencyRead] = None
    realization_status: Optional[RealizationStatusRead] = None
    contract_step: Optional[ContractStepRead] = None
    approval_status: Optional[ApprovalStatusRead] = None
    consultation: Optional[ConsultationRead] = None
    contract_up: Optional[DesignationRead] = None


class ContractItemCreate(BaseModel):
    designation: Optional[str] = Field(None, max_length=200)
    reference: Optional[str] = Field(None, max_length=100)
    quantity: Optional[float] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)
    observation: Optional[str] = None
    contract_id: Optional[int] = None


class ContractItemRead(ReadModel):
    id: int
    designation: Optional[str] = None
    reference: Optional[str] = None
    quantity: Optional[float] = None
    unit_price: Optional[float] = None
    observation: Optional[str] = None
    contract_id: Optional[int] = None

    contract: Optional[ContractRead] = None


class ContractItemTotals(BaseModel):
    contract_id: int
    item_count: int
    total_quantity: float
    total_value: float
