from typing import List

from fastapi import Depends, Path

from app.api.crud import build_crud_router
from app.schemas.consultation import (
    AwardMethodCreate,
    AwardMethodRead,
    ConsultationCreate,
    ConsultationPhaseCreate,
    ConsultationPhaseRead,
    ConsultationRead,
    ConsultationStatistics,
    ConsultationStepCreate,
    ConsultationStepRead,
    SubmissionCreate,
    FinancialStatistics,
    SubmissionRead,
    SubmissionSummary,
)
from app.services.consultation import (
    AwardMethodService,
    ConsultationPhaseService,
    ConsultationService,
    ConsultationStepService,
    SubmissionService,
)


def _consultation_routes(router, get_service, reader):
    @router.get(
        "/statistics/{year}", response_model=ConsultationStatistics, dependencies=[reader]
    )
    def statistics(year: int = Path(..., ge=1900, le=2999), service=Depends(get_service)):
        return service.statistics(year)


def _submission_routes(router, get_service, reader):
    @router.get(
        "/by-consultation/{consultation_id}/lowest-offers",
        response_model=List[SubmissionRead],
        response_model_exclude_none=True,
        dependencies=[reader],
    )
    def lowest_offers(consultation_id: int, service=Depends(get_service)):
        return service.lowest_offers(consultation_id)

    @router.get(
        "/by-consultation/{consultation_id}/statistics",
        response_model=FinancialStatistics,
        dependencies=[reader],
    )
    def financial_statistics(consultation_id: int, service=Depends(get_service)):
        return service.financial_statistics(consultation_id)

    @router.get(
        "/by-consultation/{consultation_id}/summary",
        response_model=SubmissionSummary,
        dependencies=[reader],
    )
    def summary(consultation_id: int, service=Depends(get_service)):
        return service.summary(consultation_id)


routers = [
    build_crud_router(
        prefix="/award-methods",
        tag="award-methods",
        service_class=AwardMethodService,
        create_schema=AwardMethodCreate,
        read_schema=AwardMethodRead,
    ),
    build_crud_router(
        prefix="/consultation-phases",
        tag="consultation-phases",
        service_class=ConsultationPhaseService,
        create_schema=ConsultationPhaseCreate,
        read_schema=ConsultationPhaseRead,
        categories=True,
    ),
    build_crud_router(
        prefix="/consultation-steps",
        tag="consultation-steps",
        service_class=ConsultationStepService,
        create_schema=ConsultationStepCreate,
        read_schema=ConsultationStepRead,
        parents={"phase": "consultation_phase_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/consultations",
        tag="consultations",
        service_class=ConsultationService,
        create_schema=ConsultationCreate,
        read_schema=ConsultationRead,
        parents={
            "award-method": "award_method_id",
            "status": "realization_status_id",
            "step": "consultation_step_id",
        },
        extra_routes=_consultation_routes,
    ),
    build_crud_router(
        prefix="/submissions",
        tag="submissions",
        service_class=SubmissionService,
        create_schema=SubmissionCreate,
        read_schema=SubmissionRead,
        parents={"consultation": "consultation_id", "provider": "tender_id"},
        parent_counts=True,
        extra_routes=_submission_routes,
    ),
]
