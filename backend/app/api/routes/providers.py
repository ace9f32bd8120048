from typing import List

from fastapi import Depends, Query

from app.api.crud import build_crud_router
from app.api.deps import page_request
from app.schemas.common import CountRead, Page, PageRequest
from app.schemas.provider import (
    ClearanceCreate,
    ClearanceRead,
    EconomicDomainCreate,
    EconomicDomainRead,
    EconomicNatureCreate,
    EconomicNatureRead,
    ExclusionTypeCreate,
    ExclusionTypeRead,
    ProviderCreate,
    ProviderExclusionCreate,
    ProviderExclusionRead,
    ProviderRead,
    ProviderRepresentatorCreate,
    ProviderRepresentatorRead,
)
from app.services.provider import (
    EXPIRING_SOON_DAYS,
    ClearanceService,
    EconomicDomainService,
    EconomicNatureService,
    ExclusionTypeService,
    ProviderExclusionService,
    ProviderRepresentatorService,
    ProviderService,
)


def _period_routes(read_schema):
    """Active and expiring-soon reads for dated provider records."""

    def add(router, get_service, reader):
        @router.get(
            "/active",
            response_model=Page[read_schema],
            response_model_exclude_none=True,
            dependencies=[reader],
        )
        def active(page: PageRequest = Depends(page_request), service=Depends(get_service)):
            return service.active(page)

        @router.get(
            "/expiring-soon",
            response_model=Page[read_schema],
            response_model_exclude_none=True,
            dependencies=[reader],
        )
        def expiring_soon(
            days: int = Query(EXPIRING_SOON_DAYS, ge=1, le=365),
            page: PageRequest = Depends(page_request),
            service=Depends(get_service),
        ):
            return service.expiring_soon(page, days=days)

        @router.get(
            "/by-provider/{provider_id}/active",
            response_model=List[read_schema],
            response_model_exclude_none=True,
            dependencies=[reader],
        )
        def active_for_provider(provider_id: int, service=Depends(get_service)):
            return service.active_for_provider(provider_id)

        @router.get(
            "/by-provider/{provider_id}/active/count",
            response_model=CountRead,
            dependencies=[reader],
        )
        def count_active_for_provider(provider_id: int, service=Depends(get_service)):
            return CountRead(count=service.count_active_for_provider(provider_id))

    return add


routers = [
    build_crud_router(
        prefix="/economic-natures",
        tag="economic-natures",
        service_class=EconomicNatureService,
        create_schema=EconomicNatureCreate,
        read_schema=EconomicNatureRead,
    ),
    build_crud_router(
        prefix="/economic-domains",
        tag="economic-domains",
        service_class=EconomicDomainService,
        create_schema=EconomicDomainCreate,
        read_schema=EconomicDomainRead,
    ),
    build_crud_router(
        prefix="/exclusion-types",
        tag="exclusion-types",
        service_class=ExclusionTypeService,
        create_schema=ExclusionTypeCreate,
        read_schema=ExclusionTypeRead,
    ),
    build_crud_router(
        prefix="/providers",
        tag="providers",
        service_class=ProviderService,
        create_schema=ProviderCreate,
        read_schema=ProviderRead,
        parents={"country": "country_id", "economic-nature": "economic_nature_id"},
    ),
    build_crud_router(
        prefix="/provider-exclusions",
        tag="provider-exclusions",
        service_class=ProviderExclusionService,
        create_schema=ProviderExclusionCreate,
        read_schema=ProviderExclusionRead,
        parents={"provider": "provider_id"},
        parent_counts=True,
        extra_routes=_period_routes(ProviderExclusionRead),
    ),
    build_crud_router(
        prefix="/provider-representators",
        tag="provider-representators",
        service_class=ProviderRepresentatorService,
        create_schema=ProviderRepresentatorCreate,
        read_schema=ProviderRepresentatorRead,
        parents={"provider": "provider_id"},
        parent_counts=True,
    ),
    build_crud_router(
        prefix="/clearances",
        tag="clearances",
        service_class=ClearanceService,
        create_schema=ClearanceCreate,
        read_schema=ClearanceRead,
        parents={"provider": "provider_id"},
        extra_routes=_period_routes(ClearanceRead),
    ),
]
