from datetime import date
from typing import List, Optional

from pydantic import Field

from app.schemas.common import DesignationFields, DesignationRead
from app.schemas.contract import ContractRead
from app.schemas.core import ApprovalStatusRead, CurrencyRead, RealizationStatusRead


class AmendmentTypeCreate(DesignationFields):
    pass


class AmendmentTypeRead(DesignationRead):
    pass


class AmendmentPhaseCreate(DesignationFields):
    pass


class AmendmentPhaseRead(DesignationRead):
    pass


class AmendmentStepCreate(DesignationFields):
    amendment_phase_id: Optional[int] = None


class AmendmentStepRead(DesignationRead):
    amendment_phase_id: Optional[int] = None

    amendment_phase: Optional[AmendmentPhaseRead] = None


class AmendmentCreate(DesignationFields):
    internal_id: Optional[int] = None
    reference: Optional[str] = Field(None, max_length=100)
    amount: Optional[float] = Field(None, ge=0)
    transferable_amount: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    approval_date: Optional[date] = None
    notify_date: Optional[date] = None
    observation: Optional[str] = None
    contract_id: Optional[int] = None
    amendment_type_id: Optional[int] = None
    realization_status_id: Optional[int] = None
    amendment_step_id: Optional[int] = None
    approval_status_id: Optional[int] = None
    currency_id: Optional[int] = None
    document_ids: Optional[List[int]] = None
    referenced_mail_ids: Optional[List[int]] = None


class AmendmentRead(DesignationRead):
    internal_id: Optional[int] = None
    reference: Optional[str] = None
    amount: Optional[float] = None
    transferable_amount: Optional[float] = None
    start_date: Optional[date] = None
    approval_date: Optional[date] = None
    notify_date: Optional[date] = None
    observation: Optional[str] = None
    contract_id: Optional[int] = None
    amendment_type_id: Optional[int] = None
    realization_status_id: Optional[int] = None
    amendment_step_id: Optional[int] = None
    approval_status_id: Optional[int] = None
    currency_id: Optional[int] = None
    document_ids: List[int] = []
    referenced_mail_ids: List[int] = []

    contract: Optional[ContractRead] = None
    amendment_type: Optional[AmendmentTypeRead] = None
    realization_status: Optional[RealizationStatusRead] = None
    amendment_step: Optional[AmendmentStepRead] = None
    approval_status: Optional[ApprovalStatusRead] = None
    currency: Optional[CurrencyRead] = None
