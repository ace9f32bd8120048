from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.schemas.common import AcronymFields, DesignationFields, DesignationRead, ReadModel
from app.schemas.core import (
    ApprovalStatusRead,
    RealizationDirectorRead,
    RealizationNatureRead,
    RealizationStatusRead,
)
from app.schemas.files import FileRead
from app.schemas.plan import BudgetTypeRead
from app.schemas.provider import ProviderRead


class AwardMethodCreate(DesignationFields, AcronymFields):
    pass


class AwardMethodRead(DesignationRead):
    acronym_ar: Optional[str] = None
    acronym_en: Optional[str] = None
    acronym_fr: Optional[str] = None


class ConsultationPhaseCreate(DesignationFields):
    pass


class ConsultationPhaseRead(DesignationRead):
    pass


class ConsultationStepCreate(DesignationFields):
    consultation_phase_id: Optional[int] = None


class ConsultationStepRead(DesignationRead):
    consultation_phase_id: Optional[int] = None

    consultation_phase: Optional[ConsultationPhaseRead] = None


class ConsultationCreate(DesignationFields):
    internal_id: Optional[str] = Field(None, max_length=20)
    consultation_year: Optional[int] = Field(None, ge=1900, le=2999)
    reference: Optional[str] = Field(None, max_length=100)
    allocated_amount: Optional[float] = Field(None, ge=0)
    financial_estimation: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    approval_reference: Optional[str] = Field(None, max_length=100)
    approval_date: Optional[date] = None
    publish_date: Optional[date] = None
    deadline: Optional[date] = None
    observation: Optional[str] = None
    award_method_id: Optional[int] = None
    budget_type_id: Optional[int] = None
    realization_nature_id: Optional[int] = None
    realization_status_id: Optional[int] = None
    approval_status_id: Optional[int] = None
    realization_director_id: Optional[int] = None
    consultation_step_id: Optional[int] = None


class ConsultationRead(DesignationRead):
    internal_id: Optional[str] = None
    consultation_year: Optional[int] = None
    reference: Optional[str] = None
    allocated_amount: Optional[float] = None
    financial_estimation: Optional[float] = None
    start_date: Optional[date] = None
    approval_reference: Optional[str] = None
    approval_date: Optional[date] = None
    publish_date: Optional[date] = None
    deadline: Optional[date] = None
    observation: Optional[str] = None
    award_method_id: Optional[int] = None
    budget_type_id: Optional[int] = None
    realization_nature_id: Optional[int] = None
    realization_status_id: Optional[int] = None
    approval_status_id: Optional[int] = None
    realization_director_id: Optional[int] = None
    consultation_step_id: Optional[int] = None

    submission_count: Optional[int] = None
    days_until_deadline: Optional[int] = None
    is_expired: Optional[bool] = None
    is_active: Optional[bool] = None

    award_method: Optional[AwardMethodRead] = None
    budget_type: Optional[BudgetTypeRead] = None
    realization_nature: Optional[RealizationNatureRead] = None
    realization_status: Optional[RealizationStatusRead] = None
    approval_status: Optional[ApprovalStatusRead] = None
    realization_director: Optional[RealizationDirectorRead] = None
    consultation_step: Optional[ConsultationStepRead] = None


class SubmissionCreate(BaseModel):
    submission_date: Optional[date] = None
    financial_offer: Optional[float] = Field(None, ge=0)
    consultation_id: Optional[int] = None
    tender_id: Optional[int] = None
    administrative_part_id: Optional[int] = None
    technical_part_id: Optional[int] = None
    financial_part_id: Optional[int] = None


class SubmissionRead(ReadModel):
    id: int
    submission_date: Optional[date] = None
    financial_offer: Optional[float] = None
    consultation_id: Optional[int] = None
    tender_id: Optional[int] = None
    administrative_part_id: Optional[int] = None
    technical_part_id: Optional[int] = None
    financial_part_id: Optional[int] = None

    consultation: Optional[ConsultationRead] = None
    tender: Optional[ProviderRead] = None
    administrative_part: Optional[FileRead] = None
    technical_part: Optional[FileRead] = None
    financial_part: Optional[FileRead] = None


class ConsultationStatistics(BaseModel):
    year: int
    total_consultations: int
    total_allocated_amount: float
    average_consultation_value: float
    generated_at: datetime


class FinancialStatistics(BaseModel):
    min_offer: Optional[float] = None
    max_offer: Optional[float] = None
    avg_offer: Optional[float] = None
    total_submissions: int
    competitive_submissions: int


class SubmissionSummary(BaseModel):
    """Counts for one consultation.

    Complete submissions carry all three parts and a positive offer;
    competitive ones only need a positive offer.
    """

    total_submissions: int
    complete_submissions: int
    competitive_submissions: int
    partial_submissions: int
    financial_statistics: FinancialStatistics
