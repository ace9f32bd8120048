from app.api.crud import build_crud_router
from app.schemas.core import (
    ApprovalStatusCreate,
    ApprovalStatusRead,
    CurrencyCreate,
    CurrencyRead,
    RealizationDirectorCreate,
    RealizationDirectorRead,
    RealizationNatureCreate,
    RealizationNatureRead,
    RealizationStatusCreate,
    RealizationStatusRead,
)
from app.services.core import (
    ApprovalStatusService,
    CurrencyService,
    RealizationDirectorService,
    RealizationNatureService,
    RealizationStatusService,
)

routers = [
    build_crud_router(
        prefix="/currencies",
        tag="currencies",
        service_class=CurrencyService,
        create_schema=CurrencyCreate,
        read_schema=CurrencyRead,
    ),
    build_crud_router(
        prefix="/approval-statuses",
        tag="approval-statuses",
        service_class=ApprovalStatusService,
        create_schema=ApprovalStatusCreate,
        read_schema=ApprovalStatusRead,
        categories=True,
    ),
    build_crud_router(
        prefix="/realization-statuses",
        tag="realization-statuses",
        service_class=RealizationStatusService,
        create_schema=RealizationStatusCreate,
        read_schema=RealizationStatusRead,
        categories=True,
    ),
    build_crud_router(
        prefix="/realization-natures",
        tag="realization-natures",
        service_class=RealizationNatureService,
        create_schema=RealizationNatureCreate,
        read_schema=RealizationNatureRead,
        categories=True,
    ),
    build_crud_router(
        prefix="/realization-directors",
        tag="realization-directors",
        service_class=RealizationDirectorService,
        create_schema=RealizationDirectorCreate,
        read_schema=RealizationDirectorRead,
    ),
]
