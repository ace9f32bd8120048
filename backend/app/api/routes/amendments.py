from app.api.crud import build_crud_router
from app.schemas.amendment import (
    AmendmentCreate,
    AmendmentPhaseCreate,
    AmendmentPhaseRead,
    AmendmentRead,
    AmendmentStepCreate,
    AmendmentStepRead,
    AmendmentTypeCreate,
    AmendmentTypeRead,
)
from app.services.amendment import (
    AmendmentPhaseService,
    AmendmentService,
    AmendmentStepService,
    AmendmentTypeService,
)

routers = [
    build_crud_router(
        prefix="/amendment-types",
        tag="amendment-types",
        service_class=AmendmentTypeService,
        create_schema=AmendmentTypeCreate,
        read_schema=AmendmentTypeRead,
    ),
    build_crud_router(
        prefix="/amendment-phases",
        tag="amendment-phases",
        service_class=AmendmentPhaseService,
        create_schema=AmendmentPhaseCreate,
        read_schema=AmendmentPhaseRead,
        categories=True,
    ),
    build_crud_router(
        prefix="/amendment-steps",
        tag="amendment-steps",
        service_class=AmendmentStepService,
        create_schema=AmendmentStepCreate,
        read_schema=AmendmentStepRead,
        parents={"phase": "amendment_phase_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/amendments",
        tag="amendments",
        service_class=AmendmentService,
        create_schema=AmendmentCreate,
        read_schema=AmendmentRead,
        parents={"contract": "contract_id", "step": "amendment_step_id"},
        parent_counts=True,
    ),
]
